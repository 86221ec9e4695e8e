"""Data models for the daily timeline."""
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from utils.time_utils import clock_to_minutes, is_valid_clock


def new_entry_id() -> str:
    """Generate a synthetic entry identifier."""
    return uuid.uuid4().hex


@dataclass
class Entry:
    """Represents one checklist line of a day file and its sub-items.

    An entry is timed when both start_time and end_time are set, and untimed
    when neither is. Order inside a day is owned by the EntryStore.

    raw_content and entry_id take no part in equality: two entries are equal
    when their parsed fields are, so a serialized and re-parsed entry compares
    equal to the original.
    """
    date: date
    title: str = ""
    completed: bool = False
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    link: str = ""
    sub_tasks: List[str] = field(default_factory=list)
    raw_content: Optional[str] = field(default=None, compare=False)
    entry_id: str = field(default_factory=new_entry_id, compare=False)

    @property
    def is_timed(self) -> bool:
        """True when both ends of the time range are set."""
        return self.start_time is not None and self.end_time is not None

    @property
    def duration_minutes(self) -> Optional[int]:
        """Planned duration in minutes, or None for untimed or inverted ranges."""
        if not self.is_timed:
            return None
        if not (is_valid_clock(self.start_time) and is_valid_clock(self.end_time)):
            return None
        minutes = clock_to_minutes(self.end_time) - clock_to_minutes(self.start_time)
        return minutes if minutes >= 0 else None

    def title_markdown(self) -> str:
        """Title as written in markdown, wrapped as a link when one is set."""
        if self.link:
            return f"[{self.title}]({self.link})"
        return self.title

    def to_markdown(self) -> str:
        """Convert entry to its markdown block (entry line plus sub-task lines)."""
        checkbox = "[x]" if self.completed else "[ ]"
        time_part = f"{self.start_time} - {self.end_time} " if self.is_timed else ""

        lines = [f"- {checkbox} {time_part}{self.title_markdown()}\n"]
        for sub_task in self.sub_tasks:
            lines.append(f"  - {sub_task}\n")
        return "".join(lines)


@dataclass
class ParseWarning:
    """A line the parser skipped, with enough context to report it."""
    MALFORMED_ENTRY = "malformed_entry"
    ORPHAN_SUBTASK = "orphan_subtask"

    line_number: int
    raw: str
    reason: str
    message: str = ""

    def __post_init__(self):
        if not self.message:
            if self.reason == self.ORPHAN_SUBTASK:
                self.message = "sub-task line with no entry above it"
            else:
                self.message = "entry line does not match the entry grammar"


@dataclass
class ParseResult:
    """Entries and warnings produced from one day file."""
    entries: List[Entry] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every line was understood."""
        return not self.warnings
