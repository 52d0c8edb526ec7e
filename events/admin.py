"""Admin interface for events."""

from typing import Any, ClassVar

from django import forms
from django.contrib import admin
from django.http import HttpRequest

from events import services
from events.exceptions import ValidationFailed
from events.models import Event
from events.pipeline import EVENT_FIELDS, prepare_event_fields


class EventAdminForm(forms.ModelForm):
    """
    Admin form that runs the event pipeline on save.

    Date and time accept any notation the normalizers understand, so their form fields are wider
    than the canonical values stored on the model.
    """

    date = forms.CharField(max_length=50, help_text="e.g. 2025-03-03 or March 3, 2025")
    time = forms.CharField(max_length=20, help_text="e.g. 14:30 or 2:30 PM")

    class Meta:
        """Form metadata."""

        model = Event
        fields = EVENT_FIELDS

    def clean(self) -> dict[str, Any]:
        """Validate and normalize the submitted fields with the event pipeline."""
        cleaned_data = super().clean()
        if self.errors:
            return cleaned_data

        # The admin always submits every field, so the whole set is normalized
        submitted = {field: cleaned_data.get(field) for field in EVENT_FIELDS}
        try:
            cleaned_data.update(prepare_event_fields(submitted))
        except ValidationFailed as e:
            for field, messages in e.errors.items():
                for message in messages:
                    self.add_error(field if field in self.fields else None, message)
        return cleaned_data


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin configuration for the Event model."""

    form = EventAdminForm
    list_display = (
        "title",
        "slug",
        "date",
        "time",
        "mode",
        "organizer",
        "booking_count",
    )
    list_filter = ("mode",)
    search_fields = ("title", "slug", "organizer", "location")
    readonly_fields = ("slug", "created_at", "updated_at")
    fieldsets: ClassVar[list[Any]] = [
        (
            None,
            {"fields": ("title", "slug", "description", "overview", "image")},
        ),
        (
            "Schedule & place",
            {"fields": ("date", "time", "mode", "venue", "location")},
        ),
        (
            "Program",
            {"fields": ("audience", "organizer", "agenda", "tags")},
        ),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at")},
        ),
    ]

    @admin.display(description="Bookings")
    def booking_count(self, obj: Event) -> int:
        """Show how many bookings the event has."""
        return obj.bookings.count()

    def save_model(
        self,
        request: HttpRequest,  # noqa: ARG002
        obj: Event,
        form: forms.ModelForm,
        change: bool,  # noqa: FBT001
    ) -> None:
        """Save through the event service so the slug is derived and kept unique."""
        services.save_event(obj, derive_slug=not change or "title" in form.changed_data)
