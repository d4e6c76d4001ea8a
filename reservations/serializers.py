from rest_framework import serializers

from .duration import duration_for_restaurant
from .lifecycle import allowed_targets
from .models import Reservation, Table


# ==============================================================================
# Table Serializer
# ==============================================================================

class TableSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Table
        fields = [
            'id',
            'number',
            'capacity',
            'status',
            'status_display',
            'mergeable',
            'description',
        ]
        read_only_fields = fields


# ==============================================================================
# Reservation Serializers
# ==============================================================================

class ReservationSerializer(serializers.ModelSerializer):
    """Staff view of a reservation, including assignment and allowed next statuses."""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Reservation
        fields = [
            'id',
            'date',
            'time',
            'duration',
            'party_size',
            'contact_name',
            'contact_phone',
            'contact_email',
            'table_preference',
            'special_requests',
            'status',
            'status_display',
            'allowed_transitions',
            'assigned_table',
            'assigned_table_number',
            'admin_notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_allowed_transitions(self, obj):
        return allowed_targets(obj.status)


class ReservationCreateSerializer(serializers.ModelSerializer):
    """
    Booking intake. Reservations always start pending and unassigned; the
    duration is resolved from the restaurant's service periods.
    """

    time = serializers.TimeField(format='%H:%M', input_formats=['%H:%M'])

    class Meta:
        model = Reservation
        fields = [
            'id',
            'date',
            'time',
            'duration',
            'party_size',
            'contact_name',
            'contact_phone',
            'contact_email',
            'table_preference',
            'special_requests',
            'status',
        ]
        read_only_fields = ['id', 'duration', 'status']

    def create(self, validated_data):
        restaurant = self.context['restaurant']
        return Reservation.objects.create(
            restaurant=restaurant,
            status=Reservation.Status.PENDING,
            duration=duration_for_restaurant(restaurant, validated_data['time']),
            **validated_data,
        )


class StatusTransitionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Reservation.Status.choices)
    admin_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AssignTableSerializer(serializers.Serializer):
    table = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query-string parameters for the availability endpoints."""

    date = serializers.DateField()
    time = serializers.TimeField(input_formats=['%H:%M'])
    duration = serializers.IntegerField(required=False, min_value=1)
    party_size = serializers.IntegerField(required=False, min_value=1)
    exclude = serializers.UUIDField(required=False)


class TableSearchQuerySerializer(AvailabilityQuerySerializer):
    party_size = serializers.IntegerField(min_value=1)


class ReservationFilterSerializer(serializers.Serializer):
    """Optional ``date`` and ``status`` filters of the staff reservation list."""

    date = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=Reservation.Status.choices, required=False)
