"""Tests for the events JSON API."""
# ruff: noqa: PLR2004

from __future__ import annotations

import json
from collections.abc import Callable
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.urls import reverse
from model_bakery import baker
from pytest_mock import MockerFixture

from bookings.models import Booking
from events.models import Event


if TYPE_CHECKING:
    from django.test.client import Client


@pytest.fixture()
def form_data(event_fields: dict[str, Any]) -> dict[str, Any]:
    """Return event fields the way the multipart creation form sends them."""
    data = {key: value for key, value in event_fields.items() if key != "image"}
    data["agenda"] = json.dumps(event_fields["agenda"])
    data["tags"] = json.dumps(event_fields["tags"])
    return data


@pytest.mark.django_db
class TestEventCollection:
    """Tests for listing and creating events."""

    def test_list_empty(self, client: Client) -> None:
        """Return an empty list when there are no events."""
        response = client.get(reverse("event_collection"))
        assert response.status_code == HTTPStatus.OK
        assert response.json() == {"message": "Events fetched successfully", "events": []}

    def test_list_newest_first(self, client: Client, make_event: Callable[..., Event]) -> None:
        """List events most recent first."""
        make_event(title="First Event")
        make_event(title="Second Event")
        response = client.get(reverse("event_collection"))
        slugs = [event["slug"] for event in response.json()["events"]]
        assert slugs == ["second-event", "first-event"]

    def test_create(
        self,
        client: Client,
        media_root: Path,
        form_data: dict[str, Any],
        png_upload: SimpleUploadedFile,
    ) -> None:
        """Create an event from the form fields and the uploaded poster."""
        response = client.post(reverse("event_collection"), {**form_data, "image": png_upload})

        assert response.status_code == HTTPStatus.CREATED
        body = response.json()
        assert body["message"] == "Event created successfully"
        event = body["event"]
        assert event["slug"] == "devcon"
        assert event["date"] == "2025-03-03"
        assert event["time"] == "14:30"
        assert event["tags"] == ["python", "web"]
        assert event["image"].startswith("/media/events/")
        assert len(list(media_root.rglob("*.png"))) == 1

    def test_create_with_repeated_list_values(
        self,
        client: Client,
        media_root: Path,  # noqa: ARG002
        form_data: dict[str, Any],
        png_upload: SimpleUploadedFile,
    ) -> None:
        """Accept agenda and tags sent as repeated form values."""
        data = {**form_data, "agenda": ["Intro", "Talks"], "tags": ["rust", "wasm"]}
        response = client.post(reverse("event_collection"), {**data, "image": png_upload})
        assert response.status_code == HTTPStatus.CREATED
        assert response.json()["event"]["agenda"] == ["Intro", "Talks"]
        assert response.json()["event"]["tags"] == ["rust", "wasm"]

    def test_create_ignores_slug(
        self,
        client: Client,
        media_root: Path,  # noqa: ARG002
        form_data: dict[str, Any],
        png_upload: SimpleUploadedFile,
    ) -> None:
        """Derive the slug from the title even when one is posted."""
        data = {**form_data, "slug": "hijacked", "image": png_upload}
        response = client.post(reverse("event_collection"), data)
        assert response.json()["event"]["slug"] == "devcon"

    def test_create_without_image(self, client: Client, form_data: dict[str, Any]) -> None:
        """Reject an event without a poster."""
        response = client.post(reverse("event_collection"), form_data)
        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json()["errors"] == {"image": ["Image file is required"]}
        assert not Event.objects.exists()

    def test_create_invalid_fields_discards_image(
        self,
        client: Client,
        media_root: Path,
        form_data: dict[str, Any],
        png_upload: SimpleUploadedFile,
    ) -> None:
        """Report every invalid field and remove the already stored poster."""
        data = {**form_data, "title": "", "time": "25:00", "image": png_upload}
        response = client.post(reverse("event_collection"), data)

        assert response.status_code == HTTPStatus.BAD_REQUEST
        body = response.json()
        assert body["message"] == "Validation failed"
        assert set(body["errors"]) == {"title", "time"}
        assert not Event.objects.exists()
        assert not list(media_root.rglob("*.png"))

    def test_create_image_storage_down(
        self,
        client: Client,
        mocker: MockerFixture,
        form_data: dict[str, Any],
        png_upload: SimpleUploadedFile,
    ) -> None:
        """Block creation when the poster cannot be stored."""
        storage = mocker.patch("events.images.default_storage")
        storage.save.side_effect = OSError("disk full")
        response = client.post(reverse("event_collection"), {**form_data, "image": png_upload})
        assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
        assert not Event.objects.exists()

    def test_list_database_down(self, client: Client, mocker: MockerFixture) -> None:
        """Answer 503 when the database is unavailable."""
        mocker.patch.object(Event.objects, "newest_first", side_effect=DatabaseError("down"))
        response = client.get(reverse("event_collection"))
        assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
        assert response.json()["message"] == "Storage unavailable"

    def test_method_not_allowed(self, client: Client) -> None:
        """Only allow GET and POST."""
        response = client.delete(reverse("event_collection"))
        assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.django_db
class TestEventDetail:
    """Tests for fetching and updating a single event."""

    def test_get(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Return the event and its booking count."""
        event = make_event()
        baker.make(Booking, event=event, email="ada@example.com")
        response = client.get(reverse("event_detail", kwargs={"slug": "devcon"}))

        assert response.status_code == HTTPStatus.OK
        body = response.json()
        assert body["message"] == "Event fetched successfully"
        assert body["event"]["id"] == event.pk
        assert body["bookings"] == 1

    def test_get_case_insensitive(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Find the event regardless of slug case."""
        make_event()
        response = client.get(reverse("event_detail", kwargs={"slug": "DevCon"}))
        assert response.status_code == HTTPStatus.OK

    def test_get_unknown(self, client: Client) -> None:
        """Answer 404 for an unknown slug."""
        response = client.get(reverse("event_detail", kwargs={"slug": "missing"}))
        assert response.status_code == HTTPStatus.NOT_FOUND
        assert response.json()["error"] == "No event exists with slug: missing"

    def test_patch_json(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Apply a partial JSON update and re-derive the slug from a new title."""
        make_event()
        response = client.patch(
            reverse("event_detail", kwargs={"slug": "devcon"}),
            data=json.dumps({"title": "DevCon Europe", "time": "9:00 AM"}),
            content_type="application/json",
        )

        assert response.status_code == HTTPStatus.OK
        event = response.json()["event"]
        assert response.json()["message"] == "Event updated successfully"
        assert event["slug"] == "devcon-europe"
        assert event["time"] == "09:00"
        assert event["date"] == "2025-03-03"

    def test_patch_form_encoded(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Accept a url-encoded body for PATCH."""
        make_event()
        response = client.patch(
            reverse("event_detail", kwargs={"slug": "devcon"}),
            data="venue=Hall+B",
            content_type="application/x-www-form-urlencoded",
        )
        assert response.status_code == HTTPStatus.OK
        assert response.json()["event"]["venue"] == "Hall B"

    def test_patch_invalid(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Answer 400 with the per-field errors."""
        make_event()
        response = client.patch(
            reverse("event_detail", kwargs={"slug": "devcon"}),
            data=json.dumps({"mode": "remote"}),
            content_type="application/json",
        )
        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json()["errors"] == {"mode": ["Mode must be online, offline, or hybrid"]}

    def test_patch_malformed_json(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Answer 400 when the body is not a JSON object."""
        make_event()
        response = client.patch(
            reverse("event_detail", kwargs={"slug": "devcon"}),
            data="[1, 2",
            content_type="application/json",
        )
        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json()["errors"] == {"body": ["Request body is not valid JSON"]}

    def test_patch_unknown(self, client: Client) -> None:
        """Answer 404 when updating an unknown event."""
        response = client.patch(
            reverse("event_detail", kwargs={"slug": "missing"}),
            data=json.dumps({"title": "Whatever"}),
            content_type="application/json",
        )
        assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.django_db
class TestSimilarEvents:
    """Tests for the similar events endpoint."""

    def test_similar(self, client: Client, make_event: Callable[..., Event]) -> None:
        """Return events sharing a tag with the requested one."""
        make_event(title="PyCon", tags=["python"])
        make_event(title="PyData", tags=["python", "data"])
        make_event(title="RustConf", tags=["rust"])

        response = client.get(reverse("similar_events", kwargs={"slug": "pycon"}))

        assert response.status_code == HTTPStatus.OK
        assert [event["slug"] for event in response.json()["events"]] == ["pydata"]

    def test_unknown_slug(self, client: Client) -> None:
        """Return an empty list for an unknown event."""
        response = client.get(reverse("similar_events", kwargs={"slug": "missing"}))
        assert response.status_code == HTTPStatus.OK
        assert response.json() == {"events": []}
