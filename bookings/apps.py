"""AppConfig subclass for the bookings application."""

from django.apps import AppConfig


class BookingsConfig(AppConfig):
    """Configuration class for the bookings application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "bookings"

    def ready(self) -> None:
        """Django app initialization hook: connect the analytics signal receivers."""
        from . import signals  # noqa: F401, PLC0415

        return super().ready()
