"""
Validation and normalization pipeline for event fields.

The pipeline is pure: it never touches the database. Event create/update operations in
:mod:`events.services` run it before persisting, so every failure point is explicit and can be
exercised without storage.
"""

import json
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from events.exceptions import InvalidFormat, ValidationFailed
from events.models import (
    MAX_EVENT_TITLE_LENGTH,
    MAX_FIELD_LENGTH,
    MAX_IMAGE_URL_LENGTH,
    MIN_EVENT_TITLE_LENGTH,
    Event,
)
from events.normalizers import normalize_date, normalize_time


# Field name -> (label used in messages, max length or None for unbounded text)
TEXT_FIELDS: dict[str, tuple[str, int | None]] = {
    "title": ("Title", MAX_EVENT_TITLE_LENGTH),
    "description": ("Description", None),
    "overview": ("Overview", None),
    "image": ("Image URL", MAX_IMAGE_URL_LENGTH),
    "venue": ("Venue", MAX_FIELD_LENGTH),
    "location": ("Location", MAX_FIELD_LENGTH),
    "audience": ("Audience", MAX_FIELD_LENGTH),
    "organizer": ("Organizer", MAX_FIELD_LENGTH),
}
LIST_FIELDS: dict[str, str] = {
    "agenda": "Agenda must have at least one item",
    "tags": "At least one tag is required",
}
SCHEDULE_FIELDS: dict[str, Callable[[str], str]] = {
    "date": normalize_date,
    "time": normalize_time,
}
EVENT_FIELDS = (*TEXT_FIELDS, "mode", *LIST_FIELDS, *SCHEDULE_FIELDS)


def coerce_string_list(value: Any) -> list[str]:
    """
    Turn a submitted list value into a list of trimmed, non-empty strings.

    Accepts real sequences as well as a JSON-encoded array, which is how multipart forms send them.
    A plain string that is not JSON is treated as a single item.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            decoded = text
        value = decoded if isinstance(decoded, list) else [decoded]
    elif not isinstance(value, Iterable) or isinstance(value, Mapping):
        value = [value]
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def prepare_event_fields(
    data: Mapping[str, Any],
    *,
    instance: Event | None = None,
) -> dict[str, Any]:
    """
    Validate and normalize event fields, returning only the values to store.

    Without ``instance`` every field is required (creation). With ``instance`` only the submitted
    fields are checked, and date/time are normalized only if they differ from the stored values, so
    saving an unchanged form is a no-op.

    Unknown keys, ``slug`` included, are ignored. All problems are collected and raised together as
    a single :class:`ValidationFailed`.
    """
    creating = instance is None
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, Any] = {}

    def add_error(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    def submitted(field: str) -> bool:
        return creating or field in data

    for field, (label, max_length) in TEXT_FIELDS.items():
        if not submitted(field):
            continue
        value = data.get(field)
        text = "" if value is None else str(value).strip()
        if not text:
            add_error(field, f"{label} is required")
            continue
        if field == "title" and len(text) < MIN_EVENT_TITLE_LENGTH:
            add_error(field, f"Title must be at least {MIN_EVENT_TITLE_LENGTH} characters")
            continue
        if max_length is not None and len(text) > max_length:
            add_error(field, f"{label} must be at most {max_length} characters")
            continue
        cleaned[field] = text

    if submitted("mode"):
        mode = str(data.get("mode") or "").strip().lower()
        if not mode:
            add_error("mode", "Mode is required")
        elif mode not in Event.Mode.values:
            add_error("mode", "Mode must be online, offline, or hybrid")
        else:
            cleaned["mode"] = mode

    for field, empty_message in LIST_FIELDS.items():
        if not submitted(field):
            continue
        items = coerce_string_list(data.get(field))
        if field == "tags":
            items = _dedupe(items)
        if not items:
            add_error(field, empty_message)
        else:
            cleaned[field] = items

    for field, normalize in SCHEDULE_FIELDS.items():
        if not submitted(field):
            continue
        raw = "" if data.get(field) is None else str(data.get(field)).strip()
        if not raw:
            add_error(field, f"{field.capitalize()} is required")
            continue
        if not creating and raw == getattr(instance, field):
            continue
        try:
            cleaned[field] = normalize(raw)
        except InvalidFormat as e:
            add_error(field, str(e))

    if errors:
        raise ValidationFailed(errors)

    if not creating:
        cleaned = {
            field: value for field, value in cleaned.items() if getattr(instance, field) != value
        }
    return cleaned
