"""Booking model: one attendee registration (by e-mail) for one event."""

from typing import ClassVar

from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from events.models import Event


EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
MAX_EMAIL_LENGTH = 254

validate_booking_email = RegexValidator(
    regex=EMAIL_PATTERN,
    message=_("Please provide a valid email address"),
)


class Booking(models.Model):
    """A registration of an e-mail address for an event. Immutable once created."""

    event = models.ForeignKey(
        Event,
        on_delete=models.PROTECT,
        related_name="bookings",
        help_text=_("The event being booked"),
    )

    email = models.CharField(
        max_length=MAX_EMAIL_LENGTH,
        validators=[validate_booking_email],
        help_text=_("E-mail address of the attendee, stored lower-cased"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Metadata for the Booking model."""

        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering: ClassVar[list[str]] = ["-created_at"]
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=["event", "email"],
                name="unique_booking_per_event_email",
            ),
        ]

    def __str__(self) -> str:
        """Return the booked e-mail and event."""
        return f"{self.email} @ {self.event_id}"

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation of the booking."""
        return {
            "id": self.pk,
            "event_id": self.event_id,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
