from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from reservations.models import Reservation, Restaurant, Table, TableOccupation

from .base import DAY, ReservationTestMixin

User = get_user_model()
Status = Reservation.Status


class ReservationAPITestCase(ReservationTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.staff = User.objects.create_user(username="staff", password="password123")
        self.client.force_authenticate(self.staff)
        self.base = f"/api/v1/restaurants/{self.restaurant.pk}"

    def intake_payload(self, **overrides):
        payload = {
            "date": DAY.isoformat(),
            "time": "12:30",
            "party_size": 4,
            "contact_name": "Awa Jallow",
            "contact_phone": "+2207701234",
            "contact_email": "awa@example.com",
        }
        payload.update(overrides)
        return payload


class BookingIntakeTests(ReservationAPITestCase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(None)

    def test_anonymous_customer_creates_pending_reservation(self):
        TableOccupation.objects.create(restaurant=self.restaurant, lunch_minutes=75)

        response = self.client.post(f"{self.base}/reservations/", self.intake_payload(table_preference=3), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Status.PENDING)
        self.assertEqual(response.data["duration"], 75)
        reservation = Reservation.objects.get(pk=response.data["id"])
        self.assertIsNone(reservation.assigned_table)
        self.assertEqual(reservation.table_preference, 3)

    def test_default_duration_without_service_periods(self):
        response = self.client.post(f"{self.base}/reservations/", self.intake_payload(), format="json")
        self.assertEqual(response.data["duration"], 90)

    def test_status_and_assignment_cannot_be_forced_by_customer(self):
        table = self.make_table(1)
        payload = self.intake_payload(status=Status.CONFIRMED, assigned_table=table.pk)

        response = self.client.post(f"{self.base}/reservations/", payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        reservation = Reservation.objects.get(pk=response.data["id"])
        self.assertEqual(reservation.status, Status.PENDING)
        self.assertIsNone(reservation.assigned_table_id)

    def test_invalid_input_is_rejected(self):
        for overrides in ({"party_size": 25}, {"party_size": 0}, {"contact_phone": "call me"},
                          {"contact_email": "nope"}, {"time": "7pm"}):
            with self.subTest(overrides=overrides):
                response = self.client.post(f"{self.base}/reservations/", self.intake_payload(**overrides), format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_restaurant(self):
        response = self.client.post("/api/v1/restaurants/9999/reservations/", self.intake_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_staff_endpoints_require_authentication(self):
        response = self.client.get(f"{self.base}/reservations/")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class ReservationListTests(ReservationAPITestCase):
    def test_filters_by_date_and_status(self):
        self.make_reservation("19:00", status=Status.PENDING)
        confirmed = self.make_reservation("20:00", status=Status.CONFIRMED, table=self.make_table(1))
        self.make_reservation("19:00", status=Status.CONFIRMED, day=DAY.replace(day=16))

        response = self.client.get(f"{self.base}/reservations/", {"date": DAY.isoformat(), "status": "confirmed"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data["results"]], [str(confirmed.pk)])
        self.assertEqual(response.data["results"][0]["assigned_table_number"], 1)

    def test_other_restaurants_are_not_visible(self):
        other = Restaurant.objects.create(name="Elsewhere")
        foreign = Reservation.objects.create(
            restaurant=other, date=DAY, time="19:00", party_size=2,
            contact_name="X", contact_phone="+1234567890", contact_email="x@example.com",
        )

        response = self.client.get(f"{self.base}/reservations/{foreign.pk}/")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_impossible_date_filter_is_rejected(self):
        response = self.client.get(f"{self.base}/reservations/", {"date": "2025-02-30"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("date", response.data)

    def test_unknown_status_filter_is_rejected(self):
        response = self.client.get(f"{self.base}/reservations/", {"status": "eaten"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_lists_allowed_transitions(self):
        reservation = self.make_reservation()
        response = self.client.get(f"{self.base}/reservations/{reservation.pk}/")
        self.assertEqual(response.data["allowed_transitions"], ["confirmed", "cancelled"])


class StatusEndpointTests(ReservationAPITestCase):
    def test_confirm_assigns_table(self):
        self.make_table(2, capacity=4)
        reservation = self.make_reservation()

        response = self.client.post(
            f"{self.base}/reservations/{reservation.pk}/status/",
            {"status": "confirmed", "admin_notes": "birthday"}, format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "confirmed")
        self.assertEqual(response.data["assigned_table_number"], 2)
        self.assertEqual(response.data["admin_notes"], "birthday")

    def test_invalid_transition_is_a_conflict(self):
        reservation = self.make_reservation()

        response = self.client.post(
            f"{self.base}/reservations/{reservation.pk}/status/", {"status": "completed"}, format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "invalid_transition")

    def test_no_capacity_is_reported(self):
        self.make_table(1, capacity=2)
        reservation = self.make_reservation(party_size=6)

        response = self.client.post(
            f"{self.base}/reservations/{reservation.pk}/status/", {"status": "confirmed"}, format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "no_capacity_match")

    def test_unknown_status_value(self):
        reservation = self.make_reservation()
        response = self.client.post(
            f"{self.base}/reservations/{reservation.pk}/status/", {"status": "eaten"}, format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AssignTableEndpointTests(ReservationAPITestCase):
    def setUp(self):
        super().setUp()
        self.small = self.make_table(1, capacity=2)
        self.large = self.make_table(2, capacity=6)

    def url(self, reservation):
        return f"{self.base}/reservations/{reservation.pk}/assign-table/"

    def test_auto_assignment(self):
        reservation = self.make_reservation(party_size=2)

        response = self.client.post(self.url(reservation), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"table": self.small.pk, "table_number": 1})

    def test_manual_assignment_with_insufficient_capacity(self):
        reservation = self.make_reservation(party_size=4)

        response = self.client.post(self.url(reservation), {"table": self.small.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "insufficient_capacity")
        self.assertIn("capacity 2", response.data["error"])

    def test_manual_assignment_to_unknown_table(self):
        reservation = self.make_reservation(party_size=2)
        response = self.client.post(self.url(reservation), {"table": 9999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "table_not_found")

    def test_available_tables_for_reservation(self):
        self.make_reservation("19:00", status=Status.CONFIRMED, table=self.small)
        reservation = self.make_reservation("19:30", party_size=2)

        response = self.client.get(f"{self.base}/reservations/{reservation.pk}/available-tables/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t["number"] for t in response.data], [2])


class TableEndpointTests(ReservationAPITestCase):
    def test_list_is_ordered_by_number(self):
        self.make_table(3)
        self.make_table(1)
        response = self.client.get(f"{self.base}/tables/")
        self.assertEqual([t["number"] for t in response.data["results"]], [1, 3])

    def test_available_tables_for_window(self):
        t1 = self.make_table(1, capacity=4)
        self.make_table(2, capacity=4)
        self.make_table(3, capacity=2)
        self.make_reservation("19:00", status=Status.SEATED, table=t1)

        response = self.client.get(
            f"{self.base}/tables/available/", {"date": DAY.isoformat(), "time": "19:45", "party_size": 3},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["duration"], 90)
        self.assertEqual([t["number"] for t in response.data["tables"]], [2])

    def test_available_tables_requires_party_size(self):
        self.make_table(1)

        response = self.client.get(f"{self.base}/tables/available/", {"date": DAY.isoformat(), "time": "19:00"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("party_size", response.data)

    def test_single_table_availability(self):
        table = self.make_table(1)
        existing = self.make_reservation("19:00", status=Status.CONFIRMED, table=table)
        url = f"{self.base}/tables/{table.pk}/availability/"

        busy = self.client.get(url, {"date": DAY.isoformat(), "time": "19:30", "duration": 90})
        excluded = self.client.get(
            url, {"date": DAY.isoformat(), "time": "19:30", "duration": 90, "exclude": str(existing.pk)},
        )

        self.assertFalse(busy.data["available"])
        self.assertTrue(excluded.data["available"])

    def test_availability_requires_date_and_time(self):
        table = self.make_table(1)
        response = self.client.get(f"{self.base}/tables/{table.pk}/availability/", {"date": DAY.isoformat()})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_tables_are_read_only(self):
        response = self.client.post(f"{self.base}/tables/", {"number": 7, "capacity": 4}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertFalse(Table.objects.filter(number=7).exists())
