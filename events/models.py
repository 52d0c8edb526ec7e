"""Event model for published developer events (conferences, meetups, hackathons)."""

from typing import TYPE_CHECKING, ClassVar

from django.core.validators import MinLengthValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


if TYPE_CHECKING:
    from django_stubs_ext.db.models.manager import RelatedManager

    from bookings.models import Booking

MAX_EVENT_TITLE_LENGTH = 200
MIN_EVENT_TITLE_LENGTH = 3
MAX_EVENT_SLUG_LENGTH = 100
MAX_FIELD_LENGTH = 200
MAX_IMAGE_URL_LENGTH = 500
DATE_LENGTH = len("YYYY-MM-DD")
TIME_LENGTH = len("HH:MM")


class EventQuerySet(models.QuerySet["Event"]):
    """Custom QuerySet for Event with lookup helpers."""

    def newest_first(self) -> "EventQuerySet":
        """Return events ordered by creation time, most recent first."""
        return self.order_by("-created_at", "-pk")

    def slug_taken(self, slug: str, exclude_pk: int | None = None) -> bool:
        """Check whether another event already uses ``slug``."""
        queryset = self.filter(slug=slug)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        return queryset.exists()


class Event(models.Model):
    """A developer event published by an organizer."""

    class Mode(models.TextChoices):
        """How attendees take part in the event."""

        ONLINE = "online", _("Online")
        OFFLINE = "offline", _("Offline")
        HYBRID = "hybrid", _("Hybrid")

    title = models.CharField(
        max_length=MAX_EVENT_TITLE_LENGTH,
        validators=[MinLengthValidator(MIN_EVENT_TITLE_LENGTH)],
        help_text=_("Title of the event"),
    )

    slug = models.SlugField(
        max_length=MAX_EVENT_SLUG_LENGTH,
        unique=True,
        editable=False,
        help_text=_("URL identifier derived from the title. Never set by hand."),
    )

    description = models.TextField(
        help_text=_("Short description shown at the top of the event page"),
    )

    overview = models.TextField(
        help_text=_("Longer overview of what the event is about"),
    )

    image = models.CharField(
        max_length=MAX_IMAGE_URL_LENGTH,
        help_text=_("URL of the event poster"),
    )

    venue = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        help_text=_("Name of the venue"),
    )

    location = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        help_text=_("City, region or address of the event"),
    )

    date = models.CharField(
        max_length=DATE_LENGTH,
        help_text=_("Event date in YYYY-MM-DD format"),
    )

    time = models.CharField(
        max_length=TIME_LENGTH,
        help_text=_("Start time in 24-hour HH:MM format"),
    )

    mode = models.CharField(
        max_length=10,
        choices=Mode.choices,
        help_text=_("Whether the event is online, offline or hybrid"),
    )

    audience = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        help_text=_("Who the event is for"),
    )

    agenda = models.JSONField(
        default=list,
        help_text=_("Ordered list of agenda items"),
    )

    organizer = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        help_text=_("Person, company or community organizing the event"),
    )

    tags = models.JSONField(
        default=list,
        help_text=_("Tags used to find similar events"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EventQuerySet.as_manager()

    if TYPE_CHECKING:
        bookings: RelatedManager[Booking]

    class Meta:
        """Metadata for the Event model."""

        verbose_name = _("Event")
        verbose_name_plural = _("Events")
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return the event title."""
        return self.title

    def shares_tags_with(self, other: "Event") -> bool:
        """Check whether this event has at least one tag in common with ``other``."""
        return not set(self.tags).isdisjoint(other.tags)

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation of the event."""
        return {
            "id": self.pk,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "overview": self.overview,
            "image": self.image,
            "venue": self.venue,
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "mode": self.mode,
            "audience": self.audience,
            "agenda": list(self.agenda),
            "organizer": self.organizer,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
