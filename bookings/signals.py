"""
Booking analytics notifications.

Two signals are sent by :mod:`bookings.services`:

* ``booking_created(booking)`` after the transaction that stored the booking has committed.
* ``booking_failed(event_id, email, reason)`` as soon as a booking attempt is rejected.

Both are sent with ``send_robust``, so a failing receiver never changes the outcome of a booking.
The receivers below write structured records to the dedicated "analytics" logger.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.dispatch import Signal, receiver

from devevent.utils.email_utils import loggable_email


if TYPE_CHECKING:
    from bookings.models import Booking


logger = structlog.get_logger("analytics")

booking_created = Signal()
booking_failed = Signal()


@receiver(booking_created)
def on_booking_created(
    sender: type[Any],
    booking: Booking,
    **_kwargs: Any,
) -> None:
    """Log a successful booking."""
    del sender, _kwargs
    logger.info(
        "event_booked",
        booking_id=booking.pk,
        event_id=booking.event_id,
        slug=booking.event.slug,
        email=loggable_email(booking.email),
    )


@receiver(booking_failed)
def on_booking_failed(
    sender: type[Any],
    event_id: Any,
    email: str | None,
    reason: str,
    **_kwargs: Any,
) -> None:
    """Log a rejected booking attempt."""
    del sender, _kwargs
    logger.warning(
        "booking_creation_failed",
        event_id=event_id,
        email=loggable_email(email),
        reason=reason,
    )
