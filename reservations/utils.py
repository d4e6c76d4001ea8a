import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def floor_plan_group(restaurant_id) -> str:
    return f"floor_plan_{restaurant_id}"


def reservations_group(restaurant_id) -> str:
    return f"reservations_{restaurant_id}"


def broadcast(group, event_type, data):
    """
    Send ``data`` to every consumer in ``group``.

    Broadcasting runs after the database commit; a missing or failing channel
    layer is logged and never undoes the committed change.
    """
    layer = get_channel_layer()
    if not layer:
        logger.warning("No channel layer configured; broadcast skipped.")
        return

    try:
        async_to_sync(layer.group_send)(group, {"type": event_type, "data": data})
        logger.debug(f"Broadcasted {event_type} to {group}")
    except Exception as exc:
        logger.error(f"Broadcast to {group} failed: {exc}", exc_info=True)


def table_payload(table):
    return {
        "id": table.pk,
        "number": table.number,
        "capacity": table.capacity,
        "status": table.status,
    }


def reservation_payload(reservation):
    return {
        "id": str(reservation.pk),
        "date": str(reservation.date),
        "time": str(reservation.time)[:5],
        "duration": reservation.duration,
        "party_size": reservation.party_size,
        "status": reservation.status,
        "assigned_table": reservation.assigned_table_id,
        "assigned_table_number": reservation.assigned_table_number,
    }
