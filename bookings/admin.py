"""Read-only admin interface for bookings."""

from django.contrib import admin
from django.http import HttpRequest

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Bookings are created through the API only and never edited afterwards."""

    list_display = ("email", "event", "created_at")
    list_filter = ("event",)
    search_fields = ("email", "event__title", "event__slug")
    list_select_related = ("event",)
    readonly_fields = ("event", "email", "created_at", "updated_at")

    def has_add_permission(self, request: HttpRequest) -> bool:  # noqa: ARG002
        """Prevent adding bookings through the admin."""
        return False

    def has_change_permission(self, request: HttpRequest, obj: Booking | None = None) -> bool:  # noqa: ARG002
        """Prevent editing bookings."""
        return False

    def has_delete_permission(self, request: HttpRequest, obj: Booking | None = None) -> bool:  # noqa: ARG002
        """Prevent deleting bookings."""
        return False
