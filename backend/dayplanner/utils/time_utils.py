"""
Wall-clock time arithmetic for schedule entries.

All entry times use the canonical 12-hour text form ``"H:MM AM|PM"``
(hour 1-12 without leading zero, two-digit minute, upper-case meridiem).
Internally a time is a minute-of-day integer in ``[0, 1439]``.
"""

from __future__ import annotations

import re

from dayplanner.core.exceptions import FormatError

MINUTES_PER_DAY = 24 * 60

_CANONICAL_RE = re.compile(r"(1[0-2]|[1-9]):([0-5][0-9]) (AM|PM)")
# Accepts "06:00am", "6:00 pm", "6.00 PM", "6:00PM"
_LENIENT_RE = re.compile(r"\s*(\d{1,2})[:.](\d{2})\s*([AaPp])\.?[Mm]\.?\s*")


def is_canonical_time(text: str) -> bool:
    return isinstance(text, str) and _CANONICAL_RE.fullmatch(text) is not None


def parse_time_to_minutes(text: str) -> int:
    """
    Convert canonical time text to minute-of-day.

    12 AM is midnight (0) and 12 PM is noon (720).

    Raises:
        FormatError: If ``text`` is not canonical
    """
    match = _CANONICAL_RE.fullmatch(text) if isinstance(text, str) else None
    if not match:
        raise FormatError(text)
    hour = int(match.group(1)) % 12
    minute = int(match.group(2))
    if match.group(3) == "PM":
        hour += 12
    return hour * 60 + minute


def format_minutes_to_time(minutes: int) -> str:
    """Convert minute-of-day (taken modulo 1440) to canonical time text."""
    minutes %= MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    meridiem = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {meridiem}"


def duration(start: str, end: str) -> int:
    """
    Minutes from ``start`` to ``end``, wrapping past midnight.

    Identical start and end count as a full day (1440), never zero.
    """
    span = (parse_time_to_minutes(end) - parse_time_to_minutes(start)) % MINUTES_PER_DAY
    return span or MINUTES_PER_DAY


def add_minutes(start: str, minutes: int) -> str:
    return format_minutes_to_time(parse_time_to_minutes(start) + minutes)


def normalize_time_text(text: str) -> str:
    """
    Coerce loosely written 12-hour times into canonical form.

    Raises:
        FormatError: If the text cannot be read as a 12-hour time
    """
    if is_canonical_time(text):
        return text
    match = _LENIENT_RE.fullmatch(text) if isinstance(text, str) else None
    if not match:
        raise FormatError(text)
    hour, minute = int(match.group(1)), int(match.group(2))
    if not 1 <= hour <= 12 or minute > 59:
        raise FormatError(text)
    meridiem = "PM" if match.group(3).upper() == "P" else "AM"
    return f"{hour}:{minute:02d} {meridiem}"
