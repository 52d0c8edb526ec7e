"""
Date and time normalization for event schedules.

Organizers type dates and times in many shapes ("March 3, 2025", "2025-03-03", "2:30 PM", "14:30").
These helpers turn them into the canonical ``YYYY-MM-DD`` and 24-hour ``HH:MM`` strings stored on
:class:`events.models.Event`, raising :class:`InvalidFormat` for anything they cannot read.
"""

import re

import pandas as pd

from events.exceptions import InvalidFormat


TIME_24H_PATTERN = re.compile(r"^(?P<hours>\d{1,2}):(?P<minutes>\d{2})$")
TIME_12H_PATTERN = re.compile(r"^(?P<hours>\d{1,2}):(?P<minutes>\d{2})\s*(?P<period>AM|PM)$")

MAX_HOUR_24 = 23
MAX_HOUR_12 = 12
MAX_MINUTE = 59


def normalize_date(value: str) -> str:
    """
    Parse a date in any common notation and return it as ``YYYY-MM-DD``.

    Dates carrying a UTC offset are converted to UTC first; naive dates keep the calendar day
    they were written with.
    """
    text = str(value).strip()
    # Keywords such as "today" or "now" parse, but are not dates an organizer meant to publish
    if not any(char.isdigit() for char in text):
        msg = f"Invalid date format: {value!r}"
        raise InvalidFormat(msg)

    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError) as e:
        msg = f"Invalid date format: {value!r}"
        raise InvalidFormat(msg) from e

    if pd.isna(parsed):
        msg = f"Invalid date format: {value!r}"
        raise InvalidFormat(msg)

    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC")
    return parsed.date().isoformat()


def normalize_time(value: str) -> str:
    """
    Return a time as zero-padded 24-hour ``HH:MM``.

    Accepts ``H:MM``/``HH:MM`` (hours 0-23) and ``H:MM AM``/``HH:MM PM`` (hours 1-12, any case).
    ``12:00 AM`` is midnight (``00:00``) and ``12:00 PM`` is noon (``12:00``).
    """
    text = str(value).strip().upper()

    match = TIME_24H_PATTERN.match(text)
    if match:
        hours = int(match["hours"])
        minutes = int(match["minutes"])
        if hours <= MAX_HOUR_24 and minutes <= MAX_MINUTE:
            return f"{hours:02d}:{minutes:02d}"

    match = TIME_12H_PATTERN.match(text)
    if match:
        hours = int(match["hours"])
        minutes = int(match["minutes"])
        if 1 <= hours <= MAX_HOUR_12 and minutes <= MAX_MINUTE:
            if match["period"] == "PM" and hours != MAX_HOUR_12:
                hours += 12
            elif match["period"] == "AM" and hours == MAX_HOUR_12:
                hours = 0
            return f"{hours:02d}:{minutes:02d}"

    msg = f"Invalid time format: {value!r}. Use HH:MM or H:MM AM/PM"
    raise InvalidFormat(msg)
