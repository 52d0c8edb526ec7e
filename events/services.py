"""
Event lifecycle operations: create, update, look up and find similar events.

All writes go through :func:`prepare_event_fields` first, then claim a unique slug and persist
inside a savepoint. The ``slug`` unique constraint is the final arbiter when two writers race for
the same slug: the losing write is retried with the next free candidate.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt

from events.exceptions import NotFound, SlugConflict, StorageUnavailable
from events.models import MAX_EVENT_SLUG_LENGTH, Event
from events.pipeline import prepare_event_fields
from events.slugs import resolve_unique_slug


logger = structlog.get_logger(__name__)

DEFAULT_SLUG_MAX_ATTEMPTS = 5


def _slug_max_attempts() -> int:
    return max(1, int(getattr(settings, "EVENT_SLUG_MAX_ATTEMPTS", DEFAULT_SLUG_MAX_ATTEMPTS)))


def save_event(event: Event, *, derive_slug: bool) -> Event:
    """
    Persist ``event``, deriving its slug from the title first when ``derive_slug`` is set.

    The event must already hold cleaned values (see :func:`prepare_event_fields`).

    Raises:
        SlugConflict: If every attempt lost the race for its slug candidate.
        StorageUnavailable: If the database failed for a reason other than an integrity error.

    """
    retrying = Retrying(
        stop=stop_after_attempt(_slug_max_attempts()),
        retry=retry_if_exception_type(SlugConflict),
        reraise=True,
    )
    for attempt in retrying:
        with attempt:
            try:
                if derive_slug:
                    event.slug = resolve_unique_slug(
                        event.title,
                        lambda candidate: Event.objects.slug_taken(candidate, exclude_pk=event.pk),
                        MAX_EVENT_SLUG_LENGTH,
                    )
                with transaction.atomic():
                    event.save()
            except IntegrityError as e:
                if derive_slug and Event.objects.slug_taken(event.slug, exclude_pk=event.pk):
                    logger.info(
                        "Slug claimed concurrently, retrying",
                        slug=event.slug,
                        attempt=attempt.retry_state.attempt_number,
                    )
                    msg = f"Slug {event.slug!r} was taken by a concurrent write"
                    raise SlugConflict(msg) from e
                raise
            except DatabaseError as e:
                logger.exception("Database error saving event", event_id=event.pk)
                raise StorageUnavailable(str(e)) from e
    return event


def create_event(fields: Mapping[str, Any]) -> Event:
    """
    Create and persist a new event.

    Raises:
        ValidationFailed: If any field is missing or malformed (all problems are reported).
        SlugConflict: If no unique slug could be claimed.
        StorageUnavailable: If the database is unavailable.

    """
    cleaned = prepare_event_fields(fields)
    event = Event(**cleaned)
    save_event(event, derive_slug=True)
    logger.info("Event created", event_id=event.pk, slug=event.slug)
    return event


def update_event(event_id: int, fields: Mapping[str, Any]) -> Event:
    """
    Apply a partial update to an existing event.

    Only changed fields are written. The slug is re-derived only when the title changes, and
    date/time are re-normalized only when their submitted value differs from the stored one.

    Raises:
        NotFound: If no event has ``event_id``.
        ValidationFailed: If any submitted field is invalid.
        SlugConflict: If no unique slug could be claimed.
        StorageUnavailable: If the database is unavailable.

    """
    event = get_event(event_id)
    changes = prepare_event_fields(fields, instance=event)
    if not changes:
        logger.debug("Event update without changes", event_id=event.pk)
        return event

    for field, value in changes.items():
        setattr(event, field, value)
    save_event(event, derive_slug="title" in changes)
    logger.info("Event updated", event_id=event.pk, slug=event.slug, fields=sorted(changes))
    return event


def get_event(event_id: Any) -> Event:
    """
    Return the event with primary key ``event_id``.

    Raises:
        NotFound: If the id is malformed or no such event exists.
        StorageUnavailable: If the database is unavailable.

    """
    try:
        pk = int(event_id)
    except (TypeError, ValueError):  # fmt: skip
        msg = f"No event exists with id: {event_id}"
        raise NotFound(msg) from None

    try:
        return Event.objects.get(pk=pk)
    except Event.DoesNotExist:
        msg = f"No event exists with id: {pk}"
        raise NotFound(msg) from None
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e


def get_event_by_slug(slug: str) -> Event:
    """
    Return the event with the given slug (case-insensitive, surrounding whitespace ignored).

    Raises:
        NotFound: If the slug is empty or no event uses it.
        StorageUnavailable: If the database is unavailable.

    """
    sanitized = (slug or "").strip().lower()
    if not sanitized:
        msg = "Slug cannot be empty"
        raise NotFound(msg)

    try:
        return Event.objects.get(slug=sanitized)
    except Event.DoesNotExist:
        msg = f"No event exists with slug: {sanitized}"
        raise NotFound(msg) from None
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e


def list_events() -> list[Event]:
    """Return all events, most recent first."""
    try:
        return list(Event.objects.newest_first())
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e


def _similar_to(event: Event) -> list[Event]:
    if not event.tags:
        return []
    try:
        # Tag intersection is done in Python: JSON "contains" lookups are not portable to SQLite
        candidates = Event.objects.exclude(pk=event.pk).newest_first()
        return [other for other in candidates if event.shares_tags_with(other)]
    except DatabaseError as e:
        raise StorageUnavailable(str(e)) from e


def list_similar_events(event_id: Any) -> list[Event]:
    """
    Return every other event sharing at least one tag with the given event.

    An unknown event yields an empty list. Database failures are not hidden: they raise
    :class:`StorageUnavailable`.
    """
    try:
        event = get_event(event_id)
    except NotFound:
        return []
    return _similar_to(event)


def list_similar_events_by_slug(slug: str) -> list[Event]:
    """Slug-keyed variant of :func:`list_similar_events`."""
    try:
        event = get_event_by_slug(slug)
    except NotFound:
        return []
    return _similar_to(event)
