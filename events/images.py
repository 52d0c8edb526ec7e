"""
Poster image storage for events.

Uploaded posters are checked with Pillow, written to Django's default storage backend and
referenced on the event by URL. Creating an event is blocked when no URL can be obtained.
"""

import uuid
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, NamedTuple

import structlog
from django.conf import settings
from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

from events.exceptions import ImageStorageUnavailable, ValidationFailed


if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile


logger = structlog.get_logger(__name__)

DEFAULT_UPLOAD_DIR = "events"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024

#: Pillow format name -> file extension used for the stored file
IMAGE_EXTENSIONS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "WEBP": "webp",
}


class StoredImage(NamedTuple):
    """Location of a stored poster: storage name and public URL."""

    name: str
    url: str


def _invalid(message: str) -> ValidationFailed:
    return ValidationFailed({"image": [message]})


def _detect_format(upload: "UploadedFile") -> str:
    """Return the Pillow format of the upload, rejecting anything that is not a supported image."""
    try:
        upload.seek(0)
        with Image.open(upload) as img:
            img.verify()
            image_format = img.format or ""
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise _invalid("Uploaded file is not a valid image") from e
    finally:
        upload.seek(0)

    if image_format not in IMAGE_EXTENSIONS:
        supported = ", ".join(sorted(IMAGE_EXTENSIONS))
        raise _invalid(f"Unsupported image format. Supported formats are: {supported}")
    return image_format


def store_event_image(upload: "UploadedFile | None") -> StoredImage:
    """
    Store an uploaded poster and return where it was stored.

    Raises:
        ValidationFailed: If no file was sent, it is too large, or it is not a supported image.
        ImageStorageUnavailable: If the storage backend failed to save the file.

    """
    if upload is None:
        raise _invalid("Image file is required")

    max_bytes = getattr(settings, "EVENT_IMAGE_MAX_BYTES", DEFAULT_MAX_BYTES)
    if upload.size is not None and upload.size > max_bytes:
        raise _invalid(f"Image must be at most {max_bytes // 1024} KB")

    extension = IMAGE_EXTENSIONS[_detect_format(upload)]
    upload_dir = getattr(settings, "EVENT_IMAGE_UPLOAD_DIR", DEFAULT_UPLOAD_DIR)
    name = str(PurePosixPath(upload_dir) / f"{uuid.uuid4().hex}.{extension}")

    try:
        stored_name = default_storage.save(name, upload)
        url = default_storage.url(stored_name)
    except OSError as e:
        logger.exception("Failed to store event image", name=name)
        msg = "Image storage is unavailable"
        raise ImageStorageUnavailable(msg) from e

    logger.info("Event image stored", name=stored_name, size=upload.size)
    return StoredImage(name=stored_name, url=url)


def discard_event_image(name: str) -> None:
    """Delete a stored poster whose event could not be created. Failures are only logged."""
    try:
        default_storage.delete(name)
    except OSError:
        logger.warning("Failed to discard event image", name=name)
