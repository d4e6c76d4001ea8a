import uuid

from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

# =============================================================================
# === RESTAURANT (tenant) =====================================================
# =============================================================================

phone_regex = RegexValidator(
    regex=r'^\+?1?\d{9,15}$',
    message="Use international format: +999999999. Up to 15 digits."
)


class Restaurant(models.Model):
    """Tenant owning its tables and reservations."""
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class TableOccupation(models.Model):
    """
    Service-period configuration used to derive how long a reservation
    holds its table. Blank values fall back to the built-in period defaults.
    """
    restaurant = models.OneToOneField(
        Restaurant, on_delete=models.CASCADE, related_name="table_occupation"
    )
    breakfast_minutes = models.PositiveIntegerField(null=True, blank=True, help_text="06:00-11:00 (default 45).")
    lunch_minutes = models.PositiveIntegerField(null=True, blank=True, help_text="11:00-15:00 (default 60).")
    dinner_minutes = models.PositiveIntegerField(null=True, blank=True, help_text="From 15:00 (default 90).")

    def __str__(self):
        return f"Table occupation ({self.restaurant.name})"


# =============================================================================
# === TABLES ==================================================================
# =============================================================================

class Table(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = 'available', 'Available'
        OCCUPIED = 'occupied', 'Occupied'
        RESERVED = 'reserved', 'Reserved'

    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name='tables')
    number = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    capacity = models.PositiveIntegerField(default=2, validators=[MinValueValidator(1)])
    # Display hint only; time-windowed availability comes from reservations.
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    mergeable = models.ManyToManyField('self', blank=True)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ['restaurant', 'number']
        constraints = [
            models.UniqueConstraint(fields=['restaurant', 'number'], name='unique_table_number_per_restaurant'),
        ]

    def __str__(self):
        return f"{self.restaurant.name} - Table {self.number}"

    @property
    def is_occupied(self) -> bool:
        return self.status == self.Status.OCCUPIED


# =============================================================================
# === RESERVATIONS ============================================================
# =============================================================================

class ReservationQuerySet(models.QuerySet):
    def for_table_on(self, table_id, day):
        return self.filter(assigned_table_id=table_id, date=day)

    def blocking(self):
        """Reservations that hold their table for their time window."""
        return self.filter(status__in=Reservation.BLOCKING_STATUSES)


class Reservation(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        SEATED = 'seated', 'Seated'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'
        NO_SHOW = 'no-show', 'No-show'

    BLOCKING_STATUSES = (Status.CONFIRMED, Status.SEATED)
    TERMINAL_STATUSES = (Status.COMPLETED, Status.CANCELLED, Status.NO_SHOW)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name='reservations')

    date = models.DateField()
    time = models.TimeField()
    duration = models.PositiveIntegerField(default=90, help_text="Minutes the table is held.")
    party_size = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(20)])

    contact_name = models.CharField(max_length=120)
    contact_phone = models.CharField(validators=[phone_regex], max_length=17)
    contact_email = models.EmailField()

    table_preference = models.PositiveIntegerField(null=True, blank=True, help_text="Requested table number (advisory).")
    special_requests = models.TextField(max_length=500, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    assigned_table = models.ForeignKey(
        Table, null=True, blank=True, on_delete=models.SET_NULL, related_name='reservations'
    )
    assigned_table_number = models.PositiveIntegerField(null=True, blank=True)
    admin_notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        ordering = ['date', 'time']
        indexes = [
            models.Index(fields=['assigned_table', 'date', 'status'], name='resv_table_date_status_idx'),
            models.Index(fields=['restaurant', 'date'], name='resv_restaurant_date_idx'),
        ]

    def __str__(self):
        return f"Reservation {str(self.id)[:8]} ({self.contact_name}, {self.date} {str(self.time)[:5]})"

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES
