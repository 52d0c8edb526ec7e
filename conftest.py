"""Shared test fixtures for the events and bookings apps."""

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from pytest_django.fixtures import SettingsWrapper

from events.models import Event
from events.services import create_event


@pytest.fixture()
def event_fields() -> dict[str, Any]:
    """Return a complete set of raw event fields as an organizer would submit them."""
    return {
        "title": "DevCon",
        "description": "A conference for developers.",
        "overview": "Two days of talks and workshops about building software.",
        "image": "https://example.com/devcon.png",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "March 3, 2025",
        "time": "2:30 PM",
        "mode": "hybrid",
        "audience": "Developers",
        "agenda": ["Keynote", "Workshops", "Networking"],
        "organizer": "DevCon Foundation",
        "tags": ["python", "web", "python"],
    }


@pytest.fixture()
def make_event(event_fields: dict[str, Any]) -> Callable[..., Event]:
    """Return a factory creating events through the event service, with field overrides."""

    def _make(**overrides: Any) -> Event:
        return create_event({**event_fields, **overrides})

    return _make


@pytest.fixture()
def media_root(settings: SettingsWrapper, tmp_path: Path) -> Path:
    """Store uploaded files in a temporary directory."""
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


def _image_bytes(image_format: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture()
def png_upload() -> SimpleUploadedFile:
    """Return a small, valid PNG upload."""
    return SimpleUploadedFile("poster.png", _image_bytes("PNG"), content_type="image/png")


@pytest.fixture()
def bmp_upload() -> SimpleUploadedFile:
    """Return a valid image in a format that is not accepted for posters."""
    return SimpleUploadedFile("poster.bmp", _image_bytes("BMP"), content_type="image/bmp")


@pytest.fixture()
def superuser() -> Any:
    """Create a superuser for admin access."""
    return get_user_model().objects.create_superuser(
        username="admin",
        email="admin@example.com",
        password="password",
    )
