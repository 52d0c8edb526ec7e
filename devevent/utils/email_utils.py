"""Utility functions for handling email addresses."""

import hashlib

from django.conf import settings


def hash_email(email: str) -> str:
    """Create a SHA-256 hash of an email address."""
    return hashlib.sha256(email.encode()).hexdigest()


def loggable_email(email: str | None) -> str | None:
    """Hash an email for logging if LOG_EMAIL_HASH is enabled, otherwise return it as-is."""
    if not email:
        return email
    if getattr(settings, "LOG_EMAIL_HASH", True):
        return hash_email(email)
    return email
