import logging

from django.shortcuts import get_object_or_404
from rest_framework import mixins, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .assignment import assign_table
from .availability import find_available_tables, is_table_available
from .duration import duration_for_restaurant
from .exceptions import ReservationError
from .lifecycle import update_reservation_status
from .models import Reservation, Restaurant, Table
from .serializers import (
    AssignTableSerializer, AvailabilityQuerySerializer, ReservationCreateSerializer,
    ReservationFilterSerializer, ReservationSerializer, StatusTransitionSerializer,
    TableSearchQuerySerializer, TableSerializer,
)

logger = logging.getLogger(__name__)


def error_response(exc: ReservationError):
    return Response({"error": exc.message, "code": exc.code}, status=exc.status_code)


class RestaurantScopedMixin:
    """Resolve the tenant from the ``restaurant_id`` URL segment."""

    @property
    def restaurant(self):
        if not hasattr(self, "_restaurant"):
            self._restaurant = get_object_or_404(Restaurant, pk=self.kwargs["restaurant_id"])
        return self._restaurant


# ==============================================================================
# TABLES
# ==============================================================================

class TableViewSet(RestaurantScopedMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = TableSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Table.objects.filter(restaurant=self.restaurant).prefetch_related("mergeable").order_by("number")

    @action(detail=False, methods=["get"])
    def available(self, request, restaurant_id=None):
        """Tables that seat ``party_size`` and are free for the requested window."""
        query = TableSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        duration = params.get("duration") or duration_for_restaurant(self.restaurant, params["time"])
        tables = find_available_tables(
            self.restaurant, params["date"], params["time"], duration,
            params["party_size"], params.get("exclude"),
        )
        return Response({
            "duration": duration,
            "tables": TableSerializer(tables, many=True).data,
        })

    @action(detail=True, methods=["get"])
    def availability(self, request, restaurant_id=None, pk=None):
        table = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        duration = params.get("duration") or duration_for_restaurant(self.restaurant, params["time"])
        available = is_table_available(
            self.restaurant, table.pk, params["date"], params["time"], duration, params.get("exclude"),
        )
        return Response({"table": table.pk, "duration": duration, "available": available})


# ==============================================================================
# RESERVATIONS
# ==============================================================================

class ReservationViewSet(
    RestaurantScopedMixin,
    mixins.CreateModelMixin,
    viewsets.ReadOnlyModelViewSet,
):
    serializer_class = ReservationSerializer

    def get_permissions(self):
        # Booking intake is open to customers; everything else is staff only.
        if self.action == "create":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == "create":
            return ReservationCreateSerializer
        return ReservationSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["restaurant"] = self.restaurant
        return context

    def get_queryset(self):
        qs = Reservation.objects.filter(restaurant=self.restaurant).select_related("assigned_table")
        if self.action != "list":
            return qs.order_by("date", "time")

        query = ReservationFilterSerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        filters = query.validated_data

        if "date" in filters:
            qs = qs.filter(date=filters["date"])
        if "status" in filters:
            qs = qs.filter(status=filters["status"])
        return qs.order_by("date", "time")

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request, restaurant_id=None, pk=None):
        reservation = self.get_object()
        payload = StatusTransitionSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            reservation = update_reservation_status(
                self.restaurant, reservation.pk,
                payload.validated_data["status"],
                payload.validated_data.get("admin_notes"),
            )
        except ReservationError as exc:
            logger.info(f"Status change refused for reservation {reservation.pk}: {exc}")
            return error_response(exc)
        return Response(ReservationSerializer(reservation).data)

    @action(detail=True, methods=["post"], url_path="assign-table")
    def assign(self, request, restaurant_id=None, pk=None):
        reservation = self.get_object()
        payload = AssignTableSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            table_id, table_number = assign_table(
                self.restaurant, reservation.pk, payload.validated_data.get("table"),
            )
        except ReservationError as exc:
            logger.info(f"Table assignment refused for reservation {reservation.pk}: {exc}")
            return error_response(exc)
        return Response({"table": table_id, "table_number": table_number})

    @action(detail=True, methods=["get"], url_path="available-tables")
    def available_tables(self, request, restaurant_id=None, pk=None):
        reservation = self.get_object()
        tables = find_available_tables(
            self.restaurant, reservation.date, reservation.time, reservation.duration,
            reservation.party_size, exclude_reservation_id=reservation.pk,
        )
        return Response(TableSerializer(tables, many=True).data)
