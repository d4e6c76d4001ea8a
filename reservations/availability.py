import logging
from datetime import time

from .models import Reservation, Table

logger = logging.getLogger(__name__)


def to_minutes(value) -> int:
    """Minutes since midnight for a ``datetime.time`` or an "HH:MM" string."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = str(value).split(":")[:2]
    return int(hours) * 60 + int(minutes)


def intervals_overlap(start_a: int, duration_a: int, start_b: int, duration_b: int) -> bool:
    """
    True when [start_a, start_a + duration_a) and [start_b, start_b + duration_b)
    share at least one minute. Back-to-back windows do not overlap.
    """
    return start_a < start_b + duration_b and start_b < start_a + duration_a


def is_table_available(restaurant, table_id, day, start_time, duration, exclude_reservation_id=None) -> bool:
    """
    Check whether ``table_id`` is free on ``day`` for ``duration`` minutes from
    ``start_time``.

    Only confirmed and seated reservations hold a table; pending, cancelled,
    completed and no-show ones never block. ``exclude_reservation_id`` drops
    one reservation from the check (used when re-checking a reservation's own
    window).
    """
    existing = (
        Reservation.objects.filter(restaurant=restaurant)
        .for_table_on(table_id, day)
        .blocking()
    )
    if exclude_reservation_id is not None:
        existing = existing.exclude(pk=exclude_reservation_id)

    requested_start = to_minutes(start_time)
    for reservation in existing.only("id", "time", "duration"):
        if intervals_overlap(requested_start, duration, to_minutes(reservation.time), reservation.duration):
            logger.debug(
                f"Table {table_id} busy on {day}: reservation {reservation.id} overlaps "
                f"{start_time} (+{duration} min)"
            )
            return False
    return True


def find_available_tables(restaurant, day, start_time, duration, party_size, exclude_reservation_id=None):
    """Tables that can seat ``party_size`` and are free for the window, lowest number first."""
    candidates = Table.objects.filter(restaurant=restaurant, capacity__gte=party_size).order_by("number")
    return [
        table for table in candidates
        if is_table_available(restaurant, table.pk, day, start_time, duration, exclude_reservation_id)
    ]
