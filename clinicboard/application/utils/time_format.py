from __future__ import annotations

import re

from clinicboard.application.exceptions import InvalidTimeFormat
from clinicboard.domain.entities.time_of_day import TimeOfDay

MINUTES_PER_DAY = 24 * 60

_TIME_12H_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(am|pm)\s*$", re.IGNORECASE | re.ASCII)
_TIME_24H_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$", re.ASCII)


def parse_time_24(value: str) -> TimeOfDay:
    """Parse "HH:MM" or "HH:MM:SS" into a TimeOfDay. Seconds are validated and dropped."""
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected a time string, got {type(value).__name__}")

    match = _TIME_24H_RE.match(value.strip())
    if not match:
        raise InvalidTimeFormat(f"Malformed 24-hour time: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise InvalidTimeFormat(f"24-hour time out of range: {value!r}")
    return TimeOfDay(hour=hour, minute=minute)


def parse_time_12(value: str) -> TimeOfDay:
    """Parse "H:MMam" / "H:MMpm" (case-insensitive, optional space) into a TimeOfDay."""
    if not isinstance(value, str) or not re.search(r"am|pm", value, re.IGNORECASE):
        raise InvalidTimeFormat(f"Missing am/pm in 12-hour time: {value!r}")

    match = _TIME_12H_RE.match(value)
    if not match:
        raise InvalidTimeFormat(f"Malformed 12-hour time: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    period = match.group(3).lower()
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise InvalidTimeFormat(f"12-hour time out of range: {value!r}")

    if period == "pm" and hour != 12:
        hour += 12
    elif period == "am" and hour == 12:
        hour = 0
    return TimeOfDay(hour=hour, minute=minute)


def format_12_hour(time: TimeOfDay) -> str:
    period = "pm" if time.hour >= 12 else "am"
    display_hour = time.hour % 12 or 12
    return f"{display_hour}:{time.minute:02d}{period}"


def format_24_hour(time: TimeOfDay) -> str:
    return f"{time.hour:02d}:{time.minute:02d}:00"


def to_12_hour(time24: str) -> str:
    """Convert wire format to display format, e.g. 14:30:00 -> 2:30pm."""
    return format_12_hour(parse_time_24(time24))


def to_24_hour(time12: str) -> str:
    """Convert display format to wire format, e.g. 2:30pm -> 14:30:00."""
    return format_24_hour(parse_time_12(time12))


def to_minutes(time24: str) -> int:
    return parse_time_24(time24).total_minutes


def from_minutes(minutes: int) -> str:
    """Minutes since midnight -> "HH:MM:SS". Only same-day values are representable."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return format_24_hour(TimeOfDay(hour=minutes // 60, minute=minutes % 60))


def add_minutes(time24: str, minutes: int) -> str:
    """Add minutes to a wire-format time, e.g. 09:30:00 + 45 -> 10:15:00. Raises ValueError past midnight."""
    return from_minutes(to_minutes(time24) + minutes)


def to_display_range(start24: str, end24: str) -> str:
    return f"{to_12_hour(start24)} - {to_12_hour(end24)}"
