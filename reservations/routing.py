"""
reservations/routing.py
=====================================================================================
WebSocket routes for Django Channels. Each endpoint streams one restaurant's
live updates: table status for floor-plan displays and reservation changes for
the staff console.
=====================================================================================
"""

from django.urls import re_path
from . import consumers

websocket_urlpatterns = [
    re_path(r"^ws/restaurants/(?P<restaurant_id>\d+)/floor-plan/$", consumers.FloorPlanConsumer.as_asgi()),
    re_path(r"^ws/restaurants/(?P<restaurant_id>\d+)/reservations/$", consumers.ReservationConsumer.as_asgi()),
]
