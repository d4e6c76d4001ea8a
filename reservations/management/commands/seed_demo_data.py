import random
from datetime import date, time, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction

from reservations.duration import duration_for_restaurant
from reservations.models import Reservation, Restaurant, Table, TableOccupation

GUESTS = [
    ("Awa Jallow", "+2207701234", "awa@example.com"),
    ("Lamin Ceesay", "+2207705678", "lamin@example.com"),
    ("Mariama Bah", "+2207709012", "mariama@example.com"),
    ("Ousman Sowe", "+2207703456", "ousman@example.com"),
]


class Command(BaseCommand):
    help = 'Seed the database with a demo restaurant, tables and pending reservations'

    def add_arguments(self, parser):
        parser.add_argument('--name', default='Sample Restaurant')
        parser.add_argument('--tables', type=int, default=6)
        parser.add_argument('--reservations', type=int, default=8)

    @transaction.atomic
    def handle(self, *args, **options):
        restaurant, created = Restaurant.objects.get_or_create(name=options['name'])
        if not created:
            self.stdout.write(self.style.WARNING(f"Restaurant '{restaurant.name}' already exists; adding data to it."))

        TableOccupation.objects.get_or_create(
            restaurant=restaurant,
            defaults={'breakfast_minutes': 45, 'lunch_minutes': 60, 'dinner_minutes': 90},
        )

        capacities = [2, 2, 4, 4, 6, 8]
        next_number = (restaurant.tables.order_by('-number').values_list('number', flat=True).first() or 0) + 1
        for offset in range(options['tables']):
            table = Table.objects.create(
                restaurant=restaurant,
                number=next_number + offset,
                capacity=capacities[offset % len(capacities)],
            )
            self.stdout.write(f"Created Table {table.number} (capacity {table.capacity})")

        tomorrow = date.today() + timedelta(days=1)
        for _ in range(options['reservations']):
            name, phone, email = random.choice(GUESTS)
            start = time(random.choice([8, 12, 13, 18, 19, 20]), random.choice([0, 30]))
            reservation = Reservation.objects.create(
                restaurant=restaurant,
                date=tomorrow,
                time=start,
                duration=duration_for_restaurant(restaurant, start),
                party_size=random.randint(1, 6),
                contact_name=name,
                contact_phone=phone,
                contact_email=email,
            )
            self.stdout.write(
                f"Created reservation {str(reservation.id)[:8]} at {start:%H:%M} for {reservation.party_size}"
            )

        self.stdout.write(self.style.SUCCESS('Successfully seeded the database with demo reservations'))
