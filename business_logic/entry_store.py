"""In-memory store owning every loaded timeline entry.

Entries are kept in one ordered group per date. All edits go through the
store so that the date partition and the order inside each day stay intact;
callers address entries by their entry_id, which is stable across re-renders
and reorders.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from exceptions import InvalidOperation
from models import Entry
from utils.time_utils import is_valid_clock

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("completed", "start_time", "end_time", "title", "link", "sub_tasks")
TIME_FIELDS = ("start_time", "end_time")


class EntryStore:
    """
    Holds entries across many days.

    Features:
    - Date-scoped groups preserving insertion order
    - Field edits addressed by entry_id
    - Stable single-entry moves within a day (drag-and-drop reorder)
    - Dirty tracking between exports
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._groups: Dict[date, List[Entry]] = {}
        self._dirty = False
        if entries is not None:
            self.load(entries)

    def load(self, entries: Iterable[Entry]) -> None:
        """
        Replace the whole collection.

        Used after a fresh parse of a file set. Groups are created in order
        of first appearance and entries keep their input order. Clears the
        dirty flag.

        Args:
            entries: Entries of any number of dates
        """
        groups: Dict[date, List[Entry]] = {}
        seen_ids = set()
        for entry in entries:
            if entry.entry_id in seen_ids:
                raise InvalidOperation(
                    f"Entry id {entry.entry_id} appears more than once",
                    {"entry_id": entry.entry_id}
                )
            seen_ids.add(entry.entry_id)
            groups.setdefault(entry.date, []).append(entry)

        self._groups = groups
        self._dirty = False
        logger.info("Loaded %d entries across %d days", len(seen_ids), len(groups))

    @property
    def entries(self) -> List[Entry]:
        """All entries, group by group."""
        return [entry for group in self._groups.values() for entry in group]

    @property
    def dirty(self) -> bool:
        """True if anything changed since the last load or export."""
        return self._dirty

    def clear_dirty(self) -> None:
        """Mark the store as saved. Called after every group was exported."""
        self._dirty = False

    def __len__(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def dates(self) -> List[date]:
        """Sorted list of the dates that have entries."""
        return sorted(self._groups)

    def entries_for(self, entry_date: date) -> List[Entry]:
        """Copy of one day's entries in order (empty if the day isn't loaded)."""
        return list(self._groups.get(entry_date, []))

    def group_by_date(self) -> Dict[date, List[Entry]]:
        """
        Partition the entries by date.

        Returns:
            Mapping of date to that day's entries in order. The lists are
            copies: reordering them does not reorder the store.
        """
        return {entry_date: list(group) for entry_date, group in self._groups.items()}

    def locate(self, entry_id: str) -> Tuple[date, int]:
        """
        Find an entry's position.

        Args:
            entry_id: Identifier of the entry

        Returns:
            Tuple of (date, index within that date's group)

        Raises:
            InvalidOperation: If no entry has that id
        """
        for entry_date, group in self._groups.items():
            for index, entry in enumerate(group):
                if entry.entry_id == entry_id:
                    return entry_date, index
        raise InvalidOperation(f"No entry with id {entry_id}", {"entry_id": entry_id})

    def get(self, entry_id: str) -> Entry:
        """Get an entry by id. Raises InvalidOperation if unknown."""
        entry_date, index = self.locate(entry_id)
        return self._groups[entry_date][index]

    def set_field(self, entry_id: str, field_name: str, value) -> Entry:
        """
        Overwrite one field of an entry.

        Only content fields can be edited; the date and position of an entry
        never change here. A time can only be changed on its own while the
        other end stays set; set_time_range adds or clears a whole range.
        A string for sub_tasks is split into lines.

        Args:
            entry_id: Identifier of the entry
            field_name: One of EDITABLE_FIELDS
            value: New value

        Returns:
            The edited entry

        Raises:
            InvalidOperation: Unknown entry, read-only or unknown field,
                a badly formed time, or half a time range
        """
        if field_name not in EDITABLE_FIELDS:
            raise InvalidOperation(
                f"Field {field_name!r} cannot be edited",
                {"entry_id": entry_id, "field": field_name}
            )

        entry = self.get(entry_id)

        if field_name in TIME_FIELDS:
            value = self._check_time(field_name, value)
            other = entry.end_time if field_name == "start_time" else entry.start_time
            if (value is None) != (other is None):
                raise InvalidOperation(
                    f"Setting {field_name} alone would leave half a time range; "
                    f"use set_time_range",
                    {"entry_id": entry_id, "field": field_name}
                )
        elif field_name == "sub_tasks":
            if isinstance(value, str):
                value = value.splitlines()
            value = [str(item) for item in value]
        elif field_name == "completed":
            value = bool(value)
        elif value is None:
            value = ""

        setattr(entry, field_name, value)
        self._dirty = True
        logger.debug("Set %s of entry %s on %s", field_name, entry_id, entry.date)
        return entry

    def set_time_range(self, entry_id: str, start_time: Optional[str], end_time: Optional[str]) -> Entry:
        """
        Set or clear both ends of an entry's time range together.

        Args:
            entry_id: Identifier of the entry
            start_time: HH:MM start, or None/"" to clear
            end_time: HH:MM end, or None/"" to clear

        Returns:
            The edited entry

        Raises:
            InvalidOperation: Unknown entry, a badly formed time, or only
                one end given
        """
        entry = self.get(entry_id)
        start_time, end_time = self._check_range(start_time, end_time)

        entry.start_time = start_time
        entry.end_time = end_time
        self._dirty = True
        logger.debug("Set time range of entry %s on %s to %s-%s", entry_id, entry.date, start_time, end_time)
        return entry

    def toggle_complete(self, entry_id: str) -> Entry:
        """Flip an entry's completion status."""
        entry = self.get(entry_id)
        return self.set_field(entry_id, "completed", not entry.completed)

    def reorder(self, entry_date: date, from_index: int, to_index: int) -> None:
        """
        Move one entry to a new position within its day.

        The other entries keep their relative order.

        Args:
            entry_date: Day whose group is reordered
            from_index: Current position of the entry
            to_index: Position the entry ends up at

        Raises:
            InvalidOperation: If the day isn't loaded or an index is out of range
        """
        group = self._groups.get(entry_date)
        if group is None:
            raise InvalidOperation(
                f"No entries for {entry_date.isoformat()}",
                {"date": entry_date.isoformat()}
            )
        for index in (from_index, to_index):
            if not 0 <= index < len(group):
                raise InvalidOperation(
                    f"Index {index} out of range for {entry_date.isoformat()} "
                    f"({len(group)} entries)",
                    {"date": entry_date.isoformat(), "index": index}
                )

        if from_index == to_index:
            return

        entry = group.pop(from_index)
        group.insert(to_index, entry)
        self._dirty = True
        logger.debug("Moved entry on %s from %d to %d", entry_date, from_index, to_index)

    def move_entry(self, active_id: str, over_id: str) -> None:
        """
        Move an entry onto the position of another one (drag and drop).

        Args:
            active_id: Entry being dragged
            over_id: Entry it was dropped on

        Raises:
            InvalidOperation: If the entries belong to different days
        """
        active_date, active_index = self.locate(active_id)
        over_date, over_index = self.locate(over_id)

        if active_date != over_date:
            raise InvalidOperation(
                f"Cannot move an entry from {active_date.isoformat()} "
                f"to {over_date.isoformat()}",
                {"from_date": active_date.isoformat(), "to_date": over_date.isoformat()}
            )

        self.reorder(active_date, active_index, over_index)

    def create_entry(
        self,
        entry_date: date,
        completed: bool = False,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        title: str = "",
        link: str = "",
    ) -> Entry:
        """
        Append a new entry to the end of a day, creating the day if needed.

        Args:
            entry_date: Day the entry belongs to
            completed: Initial completion status
            start_time: Optional HH:MM start
            end_time: Optional HH:MM end
            title: Entry title
            link: Optional URL

        Returns:
            The new entry, with empty sub_tasks

        Raises:
            InvalidOperation: If a time is badly formed, or only one end
                of the range is given
        """
        start_time, end_time = self._check_range(start_time, end_time)
        entry = Entry(
            date=entry_date,
            title=title,
            completed=completed,
            start_time=start_time,
            end_time=end_time,
            link=link or "",
        )
        self._groups.setdefault(entry_date, []).append(entry)
        self._dirty = True
        logger.debug("Created entry %s on %s", entry.entry_id, entry_date)
        return entry

    @classmethod
    def _check_range(cls, start_time: Optional[str], end_time: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        start_time = cls._check_time("start_time", start_time)
        end_time = cls._check_time("end_time", end_time)
        if (start_time is None) != (end_time is None):
            raise InvalidOperation(
                "A time range needs both a start and an end",
                {"start_time": start_time, "end_time": end_time}
            )
        return start_time, end_time

    @staticmethod
    def _check_time(field_name: str, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        if not is_valid_clock(value):
            raise InvalidOperation(
                f"Invalid {field_name}: {value!r} (expected HH:MM)",
                {"field": field_name, "value": value}
            )
        return value
