"""
Reservation status lifecycle.

    pending ──► confirmed ──► seated ──► completed
       │            │
       │            ├──► cancelled
       │            └──► no-show
       └──► cancelled

Each allowed (current, target) pair maps to one handler that applies the
table side effects. Everything a transition writes happens in one database
transaction.
"""
import logging

from django.db import transaction

from .assignment import assign_locked, lock_reservation
from .exceptions import InvalidTransition
from .models import Reservation, Table

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

Status = Reservation.Status


def _set_table_status(reservation, status):
    if not reservation.assigned_table_id:
        return
    table = Table.objects.select_for_update().get(pk=reservation.assigned_table_id)
    table.status = status
    table.save(update_fields=["status"])


def _confirm(reservation):
    # A table held while pending is re-validated before it blocks the window.
    assign_locked(reservation, reservation.assigned_table_id)


def _seat(reservation):
    _set_table_status(reservation, Table.Status.OCCUPIED)


def _complete(reservation):
    _set_table_status(reservation, Table.Status.AVAILABLE)


def _cancel(reservation):
    _set_table_status(reservation, Table.Status.AVAILABLE)
    reservation.assigned_table = None
    reservation.assigned_table_number = None


def _no_show(reservation):
    # The assignment stays on the reservation for the audit trail.
    _set_table_status(reservation, Table.Status.AVAILABLE)


TRANSITIONS = {
    (Status.PENDING, Status.CONFIRMED): _confirm,
    (Status.PENDING, Status.CANCELLED): _cancel,
    (Status.CONFIRMED, Status.SEATED): _seat,
    (Status.CONFIRMED, Status.CANCELLED): _cancel,
    (Status.CONFIRMED, Status.NO_SHOW): _no_show,
    (Status.SEATED, Status.COMPLETED): _complete,
}


def allowed_targets(current):
    return [target for (source, target) in TRANSITIONS if source == current]


def update_reservation_status(restaurant, reservation_id, status, admin_notes=None) -> Reservation:
    """
    Move a reservation to ``status`` and keep its table in step.

    ``admin_notes`` replaces the stored notes when given (an empty string
    clears them); ``None`` keeps them. Raises InvalidTransition for any pair
    outside TRANSITIONS and lets assignment errors from the confirm step
    through; in both cases nothing is written.
    """
    with transaction.atomic():
        reservation = lock_reservation(restaurant, reservation_id)
        previous = reservation.status

        handler = TRANSITIONS.get((previous, status))
        if handler is None:
            raise InvalidTransition(previous, status)

        handler(reservation)

        reservation.status = status
        if admin_notes is not None:
            reservation.admin_notes = admin_notes
        reservation.save(update_fields=[
            "status", "admin_notes", "assigned_table", "assigned_table_number", "updated_at",
        ])

    audit_logger.info(
        f"Reservation {reservation.id} status changed: {previous} → {status} "
        f"(table {reservation.assigned_table_number or '-'})"
    )
    return reservation
