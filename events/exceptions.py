"""
Error taxonomy for the event lifecycle and booking subsystem.

Every error raised by the events and bookings services derives from :class:`DevEventError`, so
callers (views, admin, management commands) can map them onto user-facing responses.
"""

from collections.abc import Mapping, Sequence


class DevEventError(Exception):
    """Base class for all domain errors."""


class InvalidFormat(DevEventError, ValueError):
    """A date or time string could not be parsed into its canonical form."""


class ValidationFailed(DevEventError):
    """
    One or more fields failed validation.

    Carries every violated field, not just the first one found, as a mapping of field name to a
    list of messages.
    """

    def __init__(self, errors: Mapping[str, Sequence[str]]) -> None:
        """Store the per-field error messages."""
        self.errors: dict[str, list[str]] = {field: list(msgs) for field, msgs in errors.items()}
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Validation failed for: {fields}")


class NotFound(DevEventError):
    """A lookup by slug or identifier yielded nothing."""


class ReferentialIntegrityViolation(DevEventError):
    """A booking references an event that does not exist."""


class DuplicateBooking(DevEventError):
    """A booking for the same event and e-mail already exists."""


class SlugConflict(DevEventError):
    """No free slug could be claimed within the configured number of attempts."""


class StorageUnavailable(DevEventError):
    """The database (or another storage backend) did not respond. Safe to retry."""


class ImageStorageUnavailable(StorageUnavailable):
    """The image storage backend failed to store an uploaded image."""
