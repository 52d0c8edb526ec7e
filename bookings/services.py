"""
Booking operations with referential integrity between bookings and events.

The event existence check is an early rejection only. The foreign key and the
``unique_booking_per_event_email`` constraint stay authoritative under concurrent writes. Foreign
keys are deferred until commit, so they are checked explicitly inside the insert savepoint.
"""

import re
from typing import Any

import structlog
from django.db import DatabaseError, IntegrityError, connection, transaction

from bookings.models import EMAIL_PATTERN, MAX_EMAIL_LENGTH, Booking
from bookings.signals import booking_created, booking_failed
from devevent.utils.email_utils import loggable_email
from events.exceptions import (
    DevEventError,
    DuplicateBooking,
    ReferentialIntegrityViolation,
    StorageUnavailable,
    ValidationFailed,
)
from events.models import Event


logger = structlog.get_logger(__name__)

EMAIL_RE = re.compile(EMAIL_PATTERN)


def normalize_email(email: Any) -> str:
    """
    Trim and lower-case an e-mail address.

    Raises:
        ValidationFailed: If the address is missing, too long or does not look like an e-mail
            address.

    """
    normalized = str(email).strip().lower() if email is not None else ""
    if not normalized:
        raise ValidationFailed({"email": ["Email is required"]})
    if len(normalized) > MAX_EMAIL_LENGTH:
        raise ValidationFailed(
            {"email": [f"Email must be at most {MAX_EMAIL_LENGTH} characters"]},
        )
    if not EMAIL_RE.match(normalized):
        raise ValidationFailed({"email": ["Please provide a valid email address"]})
    return normalized


def _missing_event(event_id: Any) -> ReferentialIntegrityViolation:
    return ReferentialIntegrityViolation(
        f"Event with ID {event_id} does not exist. Cannot create booking for non-existent event.",
    )


def _existing_event_pk(event_id: Any) -> int:
    if event_id is None or event_id == "":
        raise ValidationFailed({"event_id": ["Event ID is required"]})
    try:
        pk = int(event_id)
    except (TypeError, ValueError):  # fmt: skip
        raise _missing_event(event_id) from None

    try:
        exists = Event.objects.filter(pk=pk).exists()
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e
    if not exists:
        raise _missing_event(pk)
    return pk


def _insert_booking(event_id: Any, email: Any) -> Booking:
    normalized = normalize_email(email)
    pk = _existing_event_pk(event_id)

    try:
        with transaction.atomic():
            booking = Booking.objects.create(event_id=pk, email=normalized)
            connection.check_constraints(table_names=[Booking._meta.db_table])
            return booking
    except IntegrityError as e:
        if Booking.objects.filter(event_id=pk, email=normalized).exists():
            msg = f"{normalized} has already booked event {pk}"
            raise DuplicateBooking(msg) from e
        raise _missing_event(pk) from e
    except DatabaseError as e:
        logger.exception("Database error saving booking", event_id=pk)
        raise StorageUnavailable(str(e)) from e


def create_booking(event_id: Any, email: Any) -> Booking:
    """
    Book ``email`` onto the event with primary key ``event_id``.

    Raises:
        ValidationFailed: If the e-mail address or the event id is missing or malformed.
        ReferentialIntegrityViolation: If no event has ``event_id``.
        DuplicateBooking: If the address already booked this event.
        StorageUnavailable: If the database is unavailable.

    """
    try:
        booking = _insert_booking(event_id, email)
    except DevEventError as e:
        logger.info(
            "Booking rejected",
            event_id=event_id,
            email=loggable_email(str(email) if email is not None else None),
            reason=type(e).__name__,
        )
        booking_failed.send_robust(
            sender=Booking,
            event_id=event_id,
            email=str(email) if email is not None else None,
            reason=type(e).__name__,
        )
        raise

    logger.info("Booking created", booking_id=booking.pk, event_id=booking.event_id)
    transaction.on_commit(lambda: booking_created.send_robust(sender=Booking, booking=booking))
    return booking


def count_bookings(event_id: Any) -> int:
    """Return how many bookings the event has. Unknown or malformed ids count zero."""
    try:
        pk = int(event_id)
    except (TypeError, ValueError):  # fmt: skip
        return 0
    try:
        return Booking.objects.filter(event_id=pk).count()
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e
