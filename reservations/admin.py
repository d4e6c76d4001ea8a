# reservations/admin.py
import csv
import logging

from django.contrib import admin, messages
from django.http import HttpResponse
from django.utils import timezone

from .exceptions import ReservationError
from .lifecycle import update_reservation_status
from .models import Reservation, Restaurant, Table, TableOccupation

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

# =============================================================================
# === RESTAURANT & TABLE ADMIN ===============================================
# =============================================================================

class TableInline(admin.TabularInline):
    model = Table
    extra = 1
    fields = ("number", "capacity", "status", "description")


class TableOccupationInline(admin.StackedInline):
    model = TableOccupation
    can_delete = True
    max_num = 1


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    readonly_fields = ("created_at",)
    inlines = [TableOccupationInline, TableInline]


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("number", "restaurant", "capacity", "status")
    list_filter = ("restaurant", "status")
    search_fields = ("number", "description")
    filter_horizontal = ("mergeable",)
    ordering = ("restaurant", "number")


# =============================================================================
# === RESERVATION ADMIN =======================================================
# =============================================================================

def _transition_action(target, label):
    def apply(modeladmin, request, queryset):
        changed = 0
        for reservation in queryset:
            try:
                update_reservation_status(reservation.restaurant, reservation.pk, target)
                changed += 1
            except ReservationError as exc:
                modeladmin.message_user(request, f"{reservation}: {exc}", level=messages.ERROR)
        if changed:
            modeladmin.message_user(request, f"{changed} reservation(s) marked {label.lower()}.")

    apply.__name__ = f"mark_{target.replace('-', '_')}"
    return admin.action(description=f"Mark selected as {label.lower()}")(apply)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "contact_name", "restaurant", "date", "time", "party_size",
        "status", "assigned_table_number", "created_at",
    )
    list_filter = ("restaurant", "status", "date")
    search_fields = ("contact_name", "contact_email", "contact_phone")
    date_hierarchy = "date"
    ordering = ("-date", "time")
    # Status and assignment only change through the lifecycle actions below.
    readonly_fields = (
        "status", "assigned_table", "assigned_table_number", "duration", "created_at", "updated_at",
    )
    actions = [
        _transition_action(status, label)
        for status, label in Reservation.Status.choices
        if status != Reservation.Status.PENDING
    ] + ["export_selected_to_csv"]

    # --------------------------------------------------------------------------
    # CSV Export Action
    # --------------------------------------------------------------------------
    @admin.action(description="Export selected to CSV")
    def export_selected_to_csv(self, request, queryset):
        """Download the selected reservations as a CSV sheet for the floor team."""
        response = HttpResponse(content_type="text/csv")
        filename = f"reservations_{timezone.now().strftime('%Y%m%d_%H%M%S')}.csv"
        response["Content-Disposition"] = f'attachment; filename="{filename}"'

        writer = csv.writer(response)
        writer.writerow(["Date", "Time", "Party", "Name", "Phone", "Status", "Table", "Notes"])

        for reservation in queryset.order_by("date", "time"):
            writer.writerow([
                reservation.date.isoformat(),
                reservation.time.strftime("%H:%M"),
                reservation.party_size,
                reservation.contact_name,
                reservation.contact_phone,
                reservation.get_status_display(),
                reservation.assigned_table_number or "",
                reservation.admin_notes.replace("\n", " "),
            ])

        audit_logger.info(
            f"User {request.user.username} exported {queryset.count()} reservations "
            f"on {timezone.now():%Y-%m-%d %H:%M}"
        )
        return response
