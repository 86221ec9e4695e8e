"""Tests for clock, duration and file name utilities."""
import pytest
from datetime import date
from utils.time_utils import (
    clock_to_minutes,
    date_from_filename,
    export_filename,
    format_duration,
    is_valid_clock,
    minutes_to_clock,
    parse_time_range,
    weekday_name,
)


class TestClock:
    """Test HH:MM handling."""

    @pytest.mark.parametrize("value", ["00:00", "09:05", "12:30", "23:59"])
    def test_valid(self, value):
        """Test well-formed 24h times."""
        assert is_valid_clock(value) is True

    @pytest.mark.parametrize("value", ["24:00", "9:00", "12:60", "12-30", "", None, "noon"])
    def test_invalid(self, value):
        """Test times outside HH:MM or outside the day."""
        assert is_valid_clock(value) is False

    def test_clock_to_minutes(self):
        """Test conversion to minutes since midnight."""
        assert clock_to_minutes("00:00") == 0
        assert clock_to_minutes("09:30") == 570
        assert clock_to_minutes("23:59") == 1439

    def test_clock_to_minutes_invalid(self):
        """Test that invalid times raise ValueError."""
        with pytest.raises(ValueError):
            clock_to_minutes("25:00")

    def test_minutes_to_clock(self):
        """Test formatting minutes as HH:MM."""
        assert minutes_to_clock(0) == "00:00"
        assert minutes_to_clock(570) == "09:30"
        assert minutes_to_clock(1439) == "23:59"

    def test_minutes_to_clock_out_of_range(self):
        """Test that values past the end of the day raise ValueError."""
        with pytest.raises(ValueError):
            minutes_to_clock(1440)


class TestParseTimeRange:
    """Test parsing user-typed time ranges."""

    @pytest.mark.parametrize("text", ["09:00 - 09:30", "09:00-09:30", "  09:00 -09:30 "])
    def test_valid_ranges(self, text):
        """Test spacing variations around the dash."""
        assert parse_time_range(text) == ("09:00", "09:30")

    @pytest.mark.parametrize("text", ["09:00", "9:00 - 9:30", "09:00 - 25:00", "", "a - b"])
    def test_invalid_ranges(self, text):
        """Test incomplete or badly formed ranges."""
        assert parse_time_range(text) is None


class TestFormatDuration:
    """Test compact duration formatting."""

    @pytest.mark.parametrize("minutes,expected", [
        (0, "0m"),
        (45, "45m"),
        (60, "1h"),
        (90, "1h30m"),
        (150, "2h30m"),
    ])
    def test_format_duration(self, minutes, expected):
        """Test minutes to duration strings."""
        assert format_duration(minutes) == expected


class TestFileNames:
    """Test day file naming."""

    def test_weekday_name(self):
        """Test English weekday names."""
        assert weekday_name(date(2025, 1, 13)) == "Monday"
        assert weekday_name(date(2025, 1, 19)) == "Sunday"

    def test_export_filename(self):
        """Test the export naming convention."""
        assert export_filename(date(2025, 1, 15)) == "2025-01-15-Wednesday.md"

    def test_date_from_filename(self):
        """Test extracting the leading date."""
        assert date_from_filename("2025-01-15-anything-else.md") == date(2025, 1, 15)

    @pytest.mark.parametrize("name", [
        "2025-01-15.md",
        "2025-01-15-notes.txt",
        "x2025-01-15-notes.md",
        "2025-02-30-not-a-day.md",
    ])
    def test_date_from_filename_rejects(self, name):
        """Test names that don't follow the convention."""
        assert date_from_filename(name) is None
