"""Utility modules for ttimeline.

This package provides time parsing, formatting and file naming helpers.

Modules:
    time_utils: Clock, duration and day-file name utilities
"""
from utils.time_utils import (
    is_valid_clock,
    clock_to_minutes,
    minutes_to_clock,
    parse_time_range,
    format_duration,
    weekday_name,
    date_from_filename,
    export_filename,
)

__all__ = [
    "is_valid_clock",
    "clock_to_minutes",
    "minutes_to_clock",
    "parse_time_range",
    "format_duration",
    "weekday_name",
    "date_from_filename",
    "export_filename",
]
