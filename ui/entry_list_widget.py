"""Entry list widget rendering one day as a list, a timeline or its week."""
from datetime import date
from typing import List, Optional

from rich.markup import escape
from textual.widgets import Static

from business_logic.entry_store import EntryStore
from business_logic.timeline import (
    entries_in_block,
    generate_time_blocks,
    group_by_week,
    split_timed,
    summarize_day,
    week_dates,
)
from config import config
from models import Entry
from utils.time_utils import format_duration

VIEW_MODES = ("list", "timeline", "week")


class EntryListWidget(Static):
    """Widget to display the entries of the current day."""

    def __init__(self, store: EntryStore, current_date: date, view_mode: str = "list"):
        super().__init__()
        self.store = store
        self.current_date = current_date
        self.view_mode = view_mode
        self.selected_index = 0

    @property
    def entries(self) -> List[Entry]:
        """Entries of the current day, in store order."""
        return self.store.entries_for(self.current_date)

    def get_selected_entry(self) -> Optional[Entry]:
        """Get the currently selected entry."""
        entries = self.entries
        if 0 <= self.selected_index < len(entries):
            return entries[self.selected_index]
        return None

    def clamp_selection(self) -> None:
        """Keep selected_index inside the current day."""
        count = len(self.entries)
        self.selected_index = max(0, min(self.selected_index, count - 1)) if count else 0

    def move_selection(self, delta: int) -> None:
        """Move the selection up or down, stopping at either end."""
        if not self.entries:
            return
        self.selected_index += delta
        self.clamp_selection()
        self.refresh()

    def cycle_view(self) -> str:
        """Switch to the next view mode and return its name."""
        index = VIEW_MODES.index(self.view_mode)
        self.view_mode = VIEW_MODES[(index + 1) % len(VIEW_MODES)]
        self.refresh()
        return self.view_mode

    def format_entry(self, entry: Entry, selected: bool, show_time: bool = True) -> str:
        """Format a single entry line with Rich markup.

        Completed entries are struck through, links are shown after the
        title, and the selected entry gets a ">" marker and reverse video.
        """
        marker = ">" if selected else " "
        checkbox = "[green]✓[/green]" if entry.completed else "○"
        title = escape(entry.title) or "[dim](untitled)[/dim]"
        if entry.completed:
            title = f"[strike]{title}[/strike]"

        time_part = ""
        if show_time and entry.is_timed:
            time_part = f"[cyan]{entry.start_time}-{entry.end_time}[/cyan] "

        link_part = f" [dim]<{escape(entry.link)}>[/dim]" if entry.link else ""

        line = f"{marker} {checkbox} {time_part}{title}{link_part}"
        if selected:
            line = f"[reverse]{line}[/reverse]"
        return line

    def render_list(self) -> str:
        """Render entries in store order with their sub-tasks."""
        lines = []
        for index, entry in enumerate(self.entries):
            lines.append(self.format_entry(entry, index == self.selected_index))
            for sub_task in entry.sub_tasks:
                lines.append(f"      [dim]•[/dim] {escape(sub_task)}")
        return "\n".join(lines)

    def render_timeline(self) -> str:
        """Render the day against fixed time slots.

        Entries that start outside the slots, and untimed entries, are
        listed underneath.
        """
        step = config.timeline_step_minutes
        blocks = generate_time_blocks(config.timeline_start_hour, config.timeline_end_hour, step)
        selected = self.get_selected_entry()
        timed, untimed = split_timed(self.entries)

        lines = []
        placed = set()
        for block in blocks:
            block_entries = entries_in_block(timed, block, step)
            if not block_entries:
                lines.append(f"[dim]{block} │[/dim]")
                continue
            for entry in block_entries:
                placed.add(entry.entry_id)
                is_selected = selected is not None and entry.entry_id == selected.entry_id
                lines.append(f"{block} │{self.format_entry(entry, is_selected)}")

        others = [entry for entry in timed if entry.entry_id not in placed] + untimed
        if others:
            lines.append("")
            lines.append("[bold]Other[/bold]")
            for entry in others:
                is_selected = selected is not None and entry.entry_id == selected.entry_id
                lines.append(self.format_entry(entry, is_selected))
        return "\n".join(lines)

    def render_week(self) -> str:
        """Render a week heading and one summary line per day of the current week."""
        iso_year, iso_week = self.current_date.isocalendar()[:2]
        loaded = group_by_week(self.store.dates()).get((iso_year, iso_week), [])
        lines = [f"[bold]Week {iso_week}, {iso_year}[/bold]  [dim]{len(loaded)} of 7 days loaded[/dim]"]
        for day in week_dates(self.current_date):
            summary = summarize_day(day, self.store.entries_for(day))
            marker = ">" if day == self.current_date else " "
            label = day.strftime("%a %Y-%m-%d")
            if summary.total_entries == 0:
                lines.append(f"{marker} [dim]{label}  no entries[/dim]")
                continue
            lines.append(
                f"{marker} {label}  {summary.completed_entries}/{summary.total_entries} done"
                f"  {format_duration(summary.planned_minutes)} planned"
            )
        return "\n".join(lines)

    def render(self) -> str:
        """Render the current view."""
        if self.view_mode == "week":
            return self.render_week()
        if not self.entries:
            return "[dim]No entries for this day. Press 'a' to add one.[/dim]"
        if self.view_mode == "timeline":
            return self.render_timeline()
        return self.render_list()
