"""Clock, duration and day-file name utilities for ttimeline."""

import re
from datetime import date
from typing import Optional, Tuple

CLOCK_PATTERN = re.compile(r'^(?:[01]\d|2[0-3]):[0-5]\d$')
DAY_FILE_PATTERN = re.compile(r'^(\d{4}-\d{2}-\d{2})-.+\.md$')
TIME_RANGE_INPUT_PATTERN = re.compile(r'^\s*(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})\s*$')

# strftime("%A") follows the process locale; exported names must not.
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def is_valid_clock(value: Optional[str]) -> bool:
    """Return True if value is a 24h HH:MM time between 00:00 and 23:59."""
    if not value:
        return False
    return CLOCK_PATTERN.match(value) is not None


def clock_to_minutes(value: str) -> int:
    """
    Convert an HH:MM time into minutes since midnight.

    Args:
        value: Time string such as "09:30"

    Returns:
        Minutes since midnight (570 for "09:30")

    Raises:
        ValueError: If value is not a valid HH:MM time
    """
    if not is_valid_clock(value):
        raise ValueError(f"Invalid time: {value!r} (expected HH:MM)")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def parse_time_range(text: str) -> Optional[Tuple[str, str]]:
    """
    Parse a range such as "09:00 - 09:30" (spaces around the dash optional).

    Args:
        text: Range typed by the user

    Returns:
        Tuple of (start, end), or None if either side isn't a valid HH:MM time
    """
    match = TIME_RANGE_INPUT_PATTERN.match(text)
    if not match:
        return None
    start, end = match.groups()
    if not (is_valid_clock(start) and is_valid_clock(end)):
        return None
    return start, end


def minutes_to_clock(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    if not 0 <= minutes < 24 * 60:
        raise ValueError(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_duration(minutes: int) -> str:
    """
    Format a number of minutes into a compact string.

    Returns format like "1h30m", "2h" or "45m".

    Args:
        minutes: Number of minutes to format

    Returns:
        Formatted duration string
    """
    if minutes < 60:
        return f"{minutes}m"

    hours = minutes // 60
    mins = minutes % 60
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h{mins}m"


def weekday_name(day: date) -> str:
    """Full English weekday name of a date."""
    return WEEKDAY_NAMES[day.weekday()]


def date_from_filename(name: str) -> Optional[date]:
    """
    Extract the day of a day file from its name.

    Day files are named YYYY-MM-DD-<suffix>.md.

    Args:
        name: File name (not a full path)

    Returns:
        The date, or None if the name doesn't follow the convention
        or the leading token isn't a real calendar date
    """
    match = DAY_FILE_PATTERN.match(name)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def export_filename(day: date) -> str:
    """Name of the exported file for a day, e.g. 2025-01-15-Wednesday.md."""
    return f"{day.isoformat()}-{weekday_name(day)}.md"
