import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from .utils import floor_plan_group, reservations_group

logger = logging.getLogger("channels")


# ==============================================================================
# Base Helper
# ==============================================================================
class SafeConsumer(AsyncWebsocketConsumer):
    """Base consumer with safe JSON sending method."""

    async def safe_send(self, data: dict):
        try:
            await self.send(text_data=json.dumps(data))
        except Exception as exc:
            logger.error(f"{self.__class__.__name__} failed to send data: {exc}")


class RestaurantGroupConsumer(SafeConsumer):
    """Joins one per-restaurant group taken from the URL route."""

    group_for = None

    async def connect(self):
        restaurant_id = self.scope["url_route"]["kwargs"]["restaurant_id"]
        self.group_name = self.group_for(restaurant_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"{self.__class__.__name__} connected ({self.group_name})")

    async def disconnect(self, code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)


# ==============================================================================
# Floor Plan / Availability Display
# ==============================================================================
class FloorPlanConsumer(RestaurantGroupConsumer):
    group_for = staticmethod(floor_plan_group)

    async def table_status(self, event):
        """Table became available, reserved or occupied."""
        await self.safe_send({"type": "table_status", "table": event["data"]})


# ==============================================================================
# Staff Console Reservation Stream
# ==============================================================================
class ReservationConsumer(RestaurantGroupConsumer):
    group_for = staticmethod(reservations_group)

    async def connect(self):
        user = self.scope.get("user")
        if not user or user.is_anonymous:
            await self.close(code=4001)
            logger.warning("❌ Reservation stream refused (unauthenticated)")
            return
        await super().connect()

    async def reservation_update(self, event):
        await self.safe_send({"type": "reservation", **event["data"]})
