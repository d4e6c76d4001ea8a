import logging

from django.db import transaction
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Reservation, Table
from .utils import (
    broadcast, floor_plan_group, reservation_payload, reservations_group, table_payload,
)

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Store previous state
# -----------------------------------------------------------------------------
@receiver(pre_save, sender=Table)
def store_previous_table_status(sender, instance, **kwargs):
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            Table.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )


@receiver(pre_save, sender=Reservation)
def store_previous_reservation_state(sender, instance, **kwargs):
    instance._previous_state = (
        Reservation.objects.filter(pk=instance.pk)
        .values_list("status", "assigned_table_id")
        .first()
    )

# -----------------------------------------------------------------------------
# Notify via WebSocket (Channels) once the change is committed
# -----------------------------------------------------------------------------
@receiver(post_save, sender=Table)
def notify_on_table_status(sender, instance, created, **kwargs):
    previous = getattr(instance, "_previous_status", None)
    if not created and previous == instance.status:
        return

    if not created:
        logger.info(f"🪑 Table {instance.number} status changed: {previous} → {instance.status}")

    payload = table_payload(instance)
    group = floor_plan_group(instance.restaurant_id)
    transaction.on_commit(lambda: broadcast(group, "table.status", payload))


@receiver(post_save, sender=Reservation)
def notify_on_reservation_update(sender, instance, created, **kwargs):
    previous = getattr(instance, "_previous_state", None)
    current = (instance.status, instance.assigned_table_id)
    if not created and previous == current:
        return

    if created:
        logger.info(f"🆕 New reservation ({instance.id}) for {instance.date}, party of {instance.party_size}.")

    payload = {"event": "created" if created else "updated", "reservation": reservation_payload(instance)}
    group = reservations_group(instance.restaurant_id)
    transaction.on_commit(lambda: broadcast(group, "reservation.update", payload))
