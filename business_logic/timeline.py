"""Day and week computations behind the timeline, week and list views."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from models import Entry
from utils.time_utils import clock_to_minutes, minutes_to_clock


@dataclass
class DaySummary:
    """Statistics for a single day."""
    date: date
    total_entries: int
    completed_entries: int
    timed_entries: int
    planned_minutes: int
    completed_minutes: int

    @property
    def completion_ratio(self) -> float:
        """Share of entries ticked off (0.0 for an empty day)."""
        if self.total_entries == 0:
            return 0.0
        return self.completed_entries / self.total_entries


def generate_time_blocks(start_hour: int = 8, end_hour: int = 17, step_minutes: int = 15) -> List[str]:
    """
    Build the HH:MM slots shown down the side of the timeline view.

    Args:
        start_hour: First hour shown
        end_hour: Hour the timeline stops at (exclusive)
        step_minutes: Slot length

    Returns:
        List like ["08:00", "08:15", ..., "16:45"]
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    return [
        minutes_to_clock(minute)
        for minute in range(start_hour * 60, end_hour * 60, step_minutes)
    ]


def entries_in_block(entries: Iterable[Entry], block: str, step_minutes: int = 15) -> List[Entry]:
    """Timed entries starting inside [block, block + step_minutes)."""
    block_start = clock_to_minutes(block)
    block_end = block_start + step_minutes
    return [
        entry for entry in entries
        if entry.is_timed and block_start <= clock_to_minutes(entry.start_time) < block_end
    ]


def split_timed(entries: Sequence[Entry]) -> Tuple[List[Entry], List[Entry]]:
    """
    Separate timed from untimed entries.

    Returns:
        Tuple of (timed entries sorted by start time, untimed entries in order).
        The sort is stable, so entries starting together keep their order.
    """
    timed = [entry for entry in entries if entry.is_timed]
    untimed = [entry for entry in entries if not entry.is_timed]
    timed.sort(key=lambda entry: clock_to_minutes(entry.start_time))
    return timed, untimed


def summarize_day(entry_date: date, entries: Sequence[Entry]) -> DaySummary:
    """
    Summarize one day's entries.

    Args:
        entry_date: The day
        entries: Entries of that day

    Returns:
        DaySummary with counts and planned/completed minutes
    """
    planned = 0
    done = 0
    timed = 0
    for entry in entries:
        minutes = entry.duration_minutes
        if minutes is None:
            continue
        timed += 1
        planned += minutes
        if entry.completed:
            done += minutes

    return DaySummary(
        date=entry_date,
        total_entries=len(entries),
        completed_entries=sum(1 for entry in entries if entry.completed),
        timed_entries=timed,
        planned_minutes=planned,
        completed_minutes=done,
    )


def week_dates(entry_date: date) -> List[date]:
    """The Monday-to-Sunday dates of the week containing entry_date."""
    monday = entry_date - timedelta(days=entry_date.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]


def group_by_week(dates: Iterable[date]) -> Dict[Tuple[int, int], List[date]]:
    """
    Group dates by ISO week.

    Returns:
        Mapping of (iso_year, iso_week) to the sorted dates in that week,
        weeks in chronological order
    """
    weeks: Dict[Tuple[int, int], List[date]] = {}
    for day in sorted(set(dates)):
        iso = day.isocalendar()
        weeks.setdefault((iso[0], iso[1]), []).append(day)
    return weeks
