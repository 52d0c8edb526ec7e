"""Tests for the bookings JSON API."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import pytest
from django.urls import reverse
from model_bakery import baker

from bookings.models import Booking
from events.models import Event


if TYPE_CHECKING:
    from django.test.client import Client


@pytest.fixture()
def event() -> Event:
    """Create an event to book."""
    return baker.make(Event, title="DevCon", slug="devcon")


@pytest.mark.django_db
class TestBookingCollection:
    """Tests for POST /api/bookings/."""

    def test_form_post(self, client: Client, event: Event) -> None:
        """Create a booking from form data."""
        response = client.post(
            reverse("booking_collection"),
            {"event_id": event.pk, "email": "Ada@Example.com"},
        )

        assert response.status_code == HTTPStatus.CREATED
        body = response.json()
        assert body["message"] == "Booking created successfully"
        assert body["booking"]["event_id"] == event.pk
        assert body["booking"]["email"] == "ada@example.com"

    def test_json_post(self, client: Client, event: Event) -> None:
        """Create a booking from a JSON body."""
        response = client.post(
            reverse("booking_collection"),
            data=json.dumps({"event_id": event.pk, "email": "ada@example.com"}),
            content_type="application/json",
        )
        assert response.status_code == HTTPStatus.CREATED
        assert Booking.objects.filter(event=event, email="ada@example.com").exists()

    def test_unknown_event(self, client: Client) -> None:
        """Answer 404 for a booking on an unknown event."""
        response = client.post(
            reverse("booking_collection"),
            {"event_id": 999, "email": "ada@example.com"},
        )
        assert response.status_code == HTTPStatus.NOT_FOUND
        assert response.json()["message"] == "Event not found"
        assert not Booking.objects.exists()

    def test_duplicate(self, client: Client, event: Event) -> None:
        """Answer 409 for a second booking of the same e-mail."""
        data: dict[str, Any] = {"event_id": event.pk, "email": "ada@example.com"}
        client.post(reverse("booking_collection"), data)
        response = client.post(reverse("booking_collection"), data)

        assert response.status_code == HTTPStatus.CONFLICT
        assert response.json()["message"] == "Already booked"
        assert Booking.objects.count() == 1

    def test_invalid_email(self, client: Client, event: Event) -> None:
        """Answer 400 for a malformed e-mail."""
        response = client.post(
            reverse("booking_collection"),
            {"event_id": event.pk, "email": "nope"},
        )
        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json()["errors"] == {"email": ["Please provide a valid email address"]}

    def test_email_too_long(self, client: Client, event: Event) -> None:
        """Answer 400 for an address longer than the column allows."""
        response = client.post(
            reverse("booking_collection"),
            {"event_id": event.pk, "email": "a" * 300 + "@example.com"},
        )
        assert response.status_code == HTTPStatus.BAD_REQUEST
        assert response.json()["errors"] == {"email": ["Email must be at most 254 characters"]}
        assert not Booking.objects.exists()

    def test_get_not_allowed(self, client: Client) -> None:
        """Only accept POST."""
        response = client.get(reverse("booking_collection"))
        assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED
