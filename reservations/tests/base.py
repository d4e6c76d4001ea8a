from datetime import date, time

from reservations.models import Reservation, Restaurant, Table

DAY = date(2025, 11, 15)


class ReservationTestMixin:
    """Restaurant fixture plus small factories for tables and reservations."""

    def setUp(self):
        super().setUp()
        self.restaurant = Restaurant.objects.create(name="Test Bistro")

    def make_table(self, number, capacity=4, **extra):
        return Table.objects.create(restaurant=self.restaurant, number=number, capacity=capacity, **extra)

    def make_reservation(self, start="19:00", duration=90, party_size=4,
                         status=Reservation.Status.PENDING, table=None, day=DAY, **extra):
        return Reservation.objects.create(
            restaurant=self.restaurant,
            date=day,
            time=time.fromisoformat(start),
            duration=duration,
            party_size=party_size,
            contact_name="Test Customer",
            contact_phone="+1234567890",
            contact_email="test@example.com",
            status=status,
            assigned_table=table,
            assigned_table_number=table.number if table else None,
            **extra,
        )
