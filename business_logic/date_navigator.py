"""Date navigation across the days loaded in an EntryStore."""
from datetime import date
from typing import Optional

from business_logic.entry_store import EntryStore


class DateNavigator:
    """Handles date-based navigation operations."""

    def __init__(self, store: EntryStore):
        """
        Initialize DateNavigator.

        Args:
            store: EntryStore holding the loaded days
        """
        self.store = store

    def prev_date(self, current: date) -> Optional[date]:
        """Closest loaded date before current, or None."""
        earlier = [day for day in self.store.dates() if day < current]
        return earlier[-1] if earlier else None

    def next_date(self, current: date) -> Optional[date]:
        """Closest loaded date after current, or None."""
        later = [day for day in self.store.dates() if day > current]
        return later[0] if later else None

    def find_prev_open_day(self, current: date) -> Optional[date]:
        """
        Find the previous loaded day that has incomplete entries.

        Args:
            current: Date to start searching from (not included)

        Returns:
            Date of the previous day with incomplete entries, or None if not found
        """
        for day in reversed(self.store.dates()):
            if day < current and self._has_open_entries(day):
                return day
        return None

    def find_next_open_day(self, current: date) -> Optional[date]:
        """
        Find the next loaded day that has incomplete entries.

        Args:
            current: Date to start searching from (not included)

        Returns:
            Date of the next day with incomplete entries, or None if not found
        """
        for day in self.store.dates():
            if day > current and self._has_open_entries(day):
                return day
        return None

    def _has_open_entries(self, day: date) -> bool:
        return any(not entry.completed for entry in self.store.entries_for(day))
