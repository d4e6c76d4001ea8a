import logging

from django.db import transaction
from django.db.models import Q

from .availability import is_table_available
from .exceptions import (
    AssignmentNotAllowed, InsufficientCapacity, NoCapacityMatch, NoTableAvailable,
    ReservationNotFound, TableNotAvailable, TableNotFound,
)
from .models import Reservation, Table

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

ASSIGNABLE_STATUSES = (Reservation.Status.PENDING, Reservation.Status.CONFIRMED)
ASSIGNMENT_FIELDS = ["assigned_table", "assigned_table_number", "updated_at"]


def lock_reservation(restaurant, reservation_id) -> Reservation:
    """Fetch a reservation row for update. Must be called inside a transaction."""
    try:
        return Reservation.objects.select_for_update().get(pk=reservation_id, restaurant=restaurant)
    except Reservation.DoesNotExist:
        raise ReservationNotFound(f"Reservation {reservation_id} not found")


def _fits(table, reservation) -> bool:
    return is_table_available(
        reservation.restaurant_id, table.pk, reservation.date, reservation.time,
        reservation.duration, exclude_reservation_id=reservation.pk,
    )


def _lock_tables(reservation, **filters):
    """
    Lock the tables matching ``filters`` together with the reservation's
    current table, in one query ordered by number.
    """
    match = Q(**filters)
    if reservation.assigned_table_id:
        match |= Q(pk=reservation.assigned_table_id)
    # One lock order everywhere keeps concurrent assignments from deadlocking.
    return list(
        Table.objects.select_for_update()
        .filter(match, restaurant_id=reservation.restaurant_id)
        .order_by("number")
    )


def _pick_table(reservation, locked) -> Table:
    candidates = [t for t in locked if t.capacity >= reservation.party_size]
    if not candidates:
        raise NoCapacityMatch(reservation.party_size)

    for table in candidates:
        if _fits(table, reservation):
            return table
    raise NoTableAvailable(reservation.party_size)


def _check_table(reservation, locked, table_id) -> Table:
    table = next((t for t in locked if t.pk == table_id), None)
    if table is None:
        raise TableNotFound(f"Table {table_id} not found")

    if table.capacity < reservation.party_size:
        raise InsufficientCapacity(table.number, table.capacity, reservation.party_size)
    if not _fits(table, reservation):
        raise TableNotAvailable(table.number)
    return table


def assign_locked(reservation, table_id=None) -> Table:
    """
    Pick (or validate) a table for an already locked reservation, update the
    table statuses and set the assignment on ``reservation``.

    The reservation itself is not saved; callers own the surrounding
    transaction and write the reservation once with their other changes.
    """
    if reservation.status not in ASSIGNABLE_STATUSES:
        raise AssignmentNotAllowed(reservation.status)

    if table_id is None:
        locked = _lock_tables(reservation, capacity__gte=reservation.party_size)
        table = _pick_table(reservation, locked)
    else:
        locked = _lock_tables(reservation, pk=table_id)
        table = _check_table(reservation, locked, table_id)

    previous_id = reservation.assigned_table_id
    reservation.assigned_table = table
    reservation.assigned_table_number = table.number

    if previous_id and previous_id != table.pk:
        released = next(t for t in locked if t.pk == previous_id)
        released.status = Table.Status.AVAILABLE
        released.save(update_fields=["status"])
        logger.info(f"Table {released.number} released from reservation {reservation.id}")

    table.status = Table.Status.RESERVED
    table.save(update_fields=["status"])

    audit_logger.info(
        f"Reservation {reservation.id} assigned to table {table.number} "
        f"({'auto' if table_id is None else 'manual'})"
    )
    return table


def assign_table(restaurant, reservation_id, table_id=None):
    """
    Assign a table to a reservation and mark the table reserved.

    Without ``table_id`` the lowest-numbered table that seats the party and is
    free for the reservation's window is chosen. With ``table_id`` that table
    is validated for capacity and availability. The reservation and table
    writes commit together or not at all.

    Returns ``(table_id, table_number)``.
    """
    with transaction.atomic():
        reservation = lock_reservation(restaurant, reservation_id)
        table = assign_locked(reservation, table_id)
        reservation.save(update_fields=ASSIGNMENT_FIELDS)
    return table.pk, table.number
