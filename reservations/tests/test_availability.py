from datetime import timedelta

from django.test import SimpleTestCase, TestCase

from reservations.availability import (
    find_available_tables, intervals_overlap, is_table_available, to_minutes,
)
from reservations.models import Reservation

from .base import DAY, ReservationTestMixin

Status = Reservation.Status


class IntervalOverlapTests(SimpleTestCase):
    def test_overlap_is_symmetric(self):
        windows = [(0, 90), (30, 30), (89, 90), (90, 90), (200, 10), (60, 180)]
        for a in windows:
            for b in windows:
                self.assertEqual(intervals_overlap(*a, *b), intervals_overlap(*b, *a), (a, b))

    def test_back_to_back_windows_do_not_overlap(self):
        t = to_minutes("18:00")
        self.assertFalse(intervals_overlap(t, 90, t + 90, 90))

    def test_one_minute_of_overlap_conflicts(self):
        t = to_minutes("18:00")
        self.assertTrue(intervals_overlap(t, 90, t + 89, 90))

    def test_containment_conflicts_both_ways(self):
        self.assertTrue(intervals_overlap(60, 180, 120, 30))
        self.assertTrue(intervals_overlap(120, 30, 60, 180))

    def test_to_minutes(self):
        self.assertEqual(to_minutes("19:30"), 19 * 60 + 30)
        self.assertEqual(to_minutes("00:00"), 0)


class TableAvailabilityTests(ReservationTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.table = self.make_table(1)

    def check(self, start, duration=90, exclude=None, table=None):
        table = table or self.table
        return is_table_available(self.restaurant, table.pk, DAY, start, duration, exclude)

    def test_free_when_no_reservations(self):
        self.assertTrue(self.check("19:00"))

    def test_free_when_existing_reservation_ends_before(self):
        self.make_reservation("17:00", status=Status.CONFIRMED, table=self.table)
        self.assertTrue(self.check("19:00"))

    def test_free_when_existing_reservation_starts_after(self):
        self.make_reservation("21:00", status=Status.CONFIRMED, table=self.table)
        self.assertTrue(self.check("19:00"))

    def test_free_when_existing_reservation_ends_exactly_at_start(self):
        self.make_reservation("17:30", status=Status.CONFIRMED, table=self.table)
        self.assertTrue(self.check("19:00"))

    def test_busy_when_existing_overlaps_start(self):
        self.make_reservation("18:00", status=Status.CONFIRMED, table=self.table)
        self.assertFalse(self.check("19:00"))

    def test_busy_when_existing_overlaps_end(self):
        self.make_reservation("20:00", status=Status.CONFIRMED, table=self.table)
        self.assertFalse(self.check("19:00"))

    def test_busy_when_request_is_inside_existing(self):
        self.make_reservation("18:00", duration=180, status=Status.CONFIRMED, table=self.table)
        self.assertFalse(self.check("19:00"))

    def test_seated_reservations_block(self):
        self.make_reservation("19:00", status=Status.SEATED, table=self.table)
        self.assertFalse(self.check("19:00"))

    def test_excluded_reservation_does_not_block(self):
        existing = self.make_reservation("19:00", status=Status.CONFIRMED, table=self.table)

        self.assertFalse(self.check("19:30"))
        self.assertTrue(self.check("19:30", exclude=existing.pk))

    def test_non_holding_statuses_never_block(self):
        for status in (Status.PENDING, Status.CANCELLED, Status.COMPLETED, Status.NO_SHOW):
            self.make_reservation("19:00", status=status, table=self.table)
        self.assertTrue(self.check("19:00"))

    def test_other_tables_and_dates_are_ignored(self):
        other = self.make_table(2)
        self.make_reservation("19:00", status=Status.CONFIRMED, table=other)
        self.make_reservation("19:00", status=Status.CONFIRMED, table=self.table, day=DAY + timedelta(days=1))
        self.assertTrue(self.check("19:00"))


class FindAvailableTablesTests(ReservationTestMixin, TestCase):
    def test_returns_free_tables_with_enough_seats_in_number_order(self):
        t3 = self.make_table(3, capacity=6)
        t1 = self.make_table(1, capacity=4)
        self.make_table(2, capacity=2)
        busy = self.make_table(4, capacity=8)
        self.make_reservation("19:00", status=Status.CONFIRMED, table=busy)

        tables = find_available_tables(self.restaurant, DAY, "19:30", 90, party_size=4)

        self.assertEqual([t.pk for t in tables], [t1.pk, t3.pk])

    def test_empty_when_nothing_fits(self):
        self.make_table(1, capacity=2)
        self.assertEqual(find_available_tables(self.restaurant, DAY, "19:00", 90, party_size=6), [])
