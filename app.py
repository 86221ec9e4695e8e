"""Main TUI application for the daily timeline."""
import logging
from datetime import date
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.widgets import Header, Static, Input
from textual.containers import Container
from textual.binding import Binding
from textual import events

from business_logic.date_navigator import DateNavigator
from business_logic.entry_store import EntryStore
from business_logic.timeline import summarize_day
from entry_parser import EntryParser, split_link
from entry_serializer import serialize
from exceptions import ExportError, InvalidOperation, ParseError
from logging_config import setup_logging
from markdown_handler import LoadResult, MarkdownHandler
from models import Entry
from ui.entry_list_widget import EntryListWidget
from ui.help_screen import HelpScreen
from ui.preview_screen import PreviewScreen
from ui.widgets import CenteredFooter
from utils.time_utils import parse_time_range

logger = logging.getLogger(__name__)

SUB_TASK_SEPARATOR = ";"


def split_sub_tasks(value: str) -> List[str]:
    """Split the sub-task input ("milk; eggs") into sub-tasks, dropping blanks."""
    return [item.strip() for item in value.split(SUB_TASK_SEPARATOR) if item.strip()]


class TimelineApp(App):
    """A terminal-based daily timeline editor."""

    TITLE = "tTimeline"

    CSS = """
    Screen {
        background: #1a1a2e;
    }

    Header {
        background: #2d2d44;
        color: #0abdc6;
    }

    #date_header {
        height: 3;
        content-align: center middle;
        background: #0abdc6;
        color: #ffffff;
        text-style: bold;
    }

    #entry_list {
        height: 1fr;
        padding: 1 2;
        overflow-y: auto;
        background: #1a1a2e;
    }

    EntryListWidget {
        height: auto;
        color: #e2e8f0;
    }

    #input_container {
        height: auto;
        padding: 1;
        background: #1a1a2e;
    }

    Input {
        margin: 0 1;
        background: #2d2d44;
        color: #ffffff;
        border: tall #8b5cf6;
    }

    Input:focus {
        border: tall #0abdc6;
    }
    """

    BINDINGS = [
        Binding("q", "quit_app", "Quit", show=False),
        Binding("h", "show_help", "Help", show=False),
        Binding("a", "add_entry", "Add", show=False),
        Binding("r", "edit_title", "Edit", show=False),
        Binding("t", "set_time", "Time", show=False),
        Binding("l", "edit_link", "Link", show=False),
        Binding("u", "edit_sub_tasks", "Sub-tasks", show=False),
        Binding("j", "move_down", "Down", show=False),
        Binding("k", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
        Binding("up", "move_up", "Up", show=False),
        Binding("shift+up", "move_entry_up", "S-↑ Move", show=False),
        Binding("shift+down", "move_entry_down", "S-↓ Move", show=False),
        Binding("left", "prev_day", "Prev Day", show=False),
        Binding("right", "next_day", "Next Day", show=False),
        Binding("shift+left", "prev_open_day", "S-← Skip", show=False),
        Binding("shift+right", "next_open_day", "S-→ Skip", show=False),
        Binding("v", "cycle_view", "View", show=False),
        Binding("p", "preview", "Preview", show=False),
        Binding("s", "export", "Export", show=False),
    ]

    def __init__(self, handler: Optional[MarkdownHandler] = None, store: Optional[EntryStore] = None):
        super().__init__()
        self.handler = handler or MarkdownHandler()
        self.store = store if store is not None else EntryStore()
        self.date_navigator = DateNavigator(self.store)
        self.line_parser = EntryParser()

        self.load_result: LoadResult = self.handler.load_into(self.store)
        dates = self.store.dates()
        # Newest loaded day first, like the file list
        self.current_date = dates[-1] if dates else date.today()

        self.adding_entry = False
        self.editing_title = False
        self.setting_time = False
        self.editing_link = False
        self.editing_sub_tasks = False
        self.quit_armed = False

    def compose(self) -> ComposeResult:
        """Compose the UI."""
        yield Header()
        yield Static(id="date_header")
        yield Container(
            EntryListWidget(self.store, self.current_date),
            id="entry_list"
        )
        yield Container(id="input_container")
        yield CenteredFooter()

    def on_mount(self) -> None:
        """Set up the app after mounting."""
        self.update_date_header()
        self.report_load_result()

    def report_load_result(self) -> None:
        """Show how loading went in the footer."""
        result = self.load_result
        skipped = sum(len(warnings) for warnings in result.warnings.values())
        parts = [f"{len(result.entries)} entries from {len(result.source_files)} file(s)"]
        if skipped:
            parts.append(f"[yellow]{skipped} line(s) skipped[/yellow]")
        if result.failures:
            parts.append(f"[red]{len(result.failures)} file(s) unreadable[/red]")
        self.set_status(" • ".join(parts))

    def set_status(self, message: str) -> None:
        """Show a status message in the footer."""
        try:
            footer = self.query_one(CenteredFooter)
        except Exception:
            # Footer not accessible (modal is open or transitioning)
            return
        footer.show_status(message, unsaved=self.store.dirty)

    def update_date_header(self) -> None:
        """Update the date header."""
        header = self.query_one("#date_header", Static)
        header.update(self.current_date.strftime("%A, %B %d, %Y"))

    def refresh_entry_list(self) -> None:
        """Refresh the entry list widget."""
        entry_widget = self.query_one(EntryListWidget)
        entry_widget.current_date = self.current_date
        entry_widget.clamp_selection()
        entry_widget.refresh(layout=True)

    def _selected_entry(self) -> Optional[Entry]:
        return self.query_one(EntryListWidget).get_selected_entry()

    def action_move_down(self) -> None:
        """Move selection down."""
        self.query_one(EntryListWidget).move_selection(1)

    def action_move_up(self) -> None:
        """Move selection up."""
        self.query_one(EntryListWidget).move_selection(-1)

    def action_toggle_complete(self) -> None:
        """Toggle completion of the selected entry."""
        entry = self._selected_entry()
        if entry:
            self.store.toggle_complete(entry.entry_id)
            self.refresh_entry_list()
            self.set_status("Entry done" if entry.completed else "Entry reopened")

    def _move_selected(self, delta: int) -> None:
        entry_widget = self.query_one(EntryListWidget)
        from_index = entry_widget.selected_index
        to_index = from_index + delta
        if not 0 <= to_index < len(entry_widget.entries):
            return
        self.store.reorder(self.current_date, from_index, to_index)
        entry_widget.selected_index = to_index
        self.refresh_entry_list()
        self.set_status("Entry moved")

    def action_move_entry_up(self) -> None:
        """Move the selected entry one position up within the day."""
        self._move_selected(-1)

    def action_move_entry_down(self) -> None:
        """Move the selected entry one position down within the day."""
        self._move_selected(1)

    def _navigate_to_date(self, new_date: Optional[date]) -> None:
        if new_date is None:
            return
        self.current_date = new_date
        self.query_one(EntryListWidget).selected_index = 0
        self.update_date_header()
        self.refresh_entry_list()

    def action_next_day(self) -> None:
        """Navigate to the next loaded day."""
        self._navigate_to_date(self.date_navigator.next_date(self.current_date))

    def action_prev_day(self) -> None:
        """Navigate to the previous loaded day."""
        self._navigate_to_date(self.date_navigator.prev_date(self.current_date))

    def action_prev_open_day(self) -> None:
        """Navigate to the previous day with open entries."""
        self._navigate_to_date(self.date_navigator.find_prev_open_day(self.current_date))

    def action_next_open_day(self) -> None:
        """Navigate to the next day with open entries."""
        self._navigate_to_date(self.date_navigator.find_next_open_day(self.current_date))

    def action_cycle_view(self) -> None:
        """Switch between list, timeline and week views."""
        view = self.query_one(EntryListWidget).cycle_view()
        self.set_status(f"{view.capitalize()} view")

    def action_show_help(self) -> None:
        """Show the help screen."""
        self.push_screen(HelpScreen())

    def action_preview(self) -> None:
        """Show the markdown the current day exports to."""
        entries = self.store.entries_for(self.current_date)
        self.push_screen(PreviewScreen(
            self.current_date,
            serialize(entries),
            summarize_day(self.current_date, entries),
        ))

    def action_export(self) -> None:
        """Export every loaded day."""
        try:
            written = self.handler.export_store(self.store)
        except ExportError as e:
            logger.error("Export failed: %s", e)
            self.set_status(f"[red]Export failed:[/red] {e.message}")
            return
        self.set_status(f"Exported {len(written)} day(s) to {self.handler.export_dir}")

    def action_quit_app(self) -> None:
        """Quit, asking for a second press when there are unsaved changes."""
        if self.store.dirty and not self.quit_armed:
            self.quit_armed = True
            self.set_status("[yellow]Unsaved changes[/yellow] - press S to export or Q again to quit")
            return
        self.exit()

    def _open_input(self, placeholder: str, value: str = "") -> None:
        container = self.query_one("#input_container")
        input_widget = Input(value=value, placeholder=placeholder)
        container.mount(input_widget)
        input_widget.focus()

    def action_add_entry(self) -> None:
        """Show input to add an entry to the current day."""
        if self.adding_entry:
            return
        self.adding_entry = True
        self._open_input("09:00 - 09:30 Title, or just a title...")

    def action_edit_title(self) -> None:
        """Edit the title of the selected entry."""
        entry = self._selected_entry()
        if not entry or self.editing_title:
            return
        self.editing_title = True
        self._open_input("Edit title...", entry.title)

    def action_set_time(self) -> None:
        """Set or clear the time range of the selected entry."""
        entry = self._selected_entry()
        if not entry or self.setting_time:
            return
        self.setting_time = True
        current = f"{entry.start_time} - {entry.end_time}" if entry.is_timed else ""
        self._open_input("HH:MM - HH:MM (empty clears)", current)

    def action_edit_link(self) -> None:
        """Set or clear the link of the selected entry."""
        entry = self._selected_entry()
        if not entry or self.editing_link:
            return
        self.editing_link = True
        self._open_input("URL (empty removes the link)", entry.link)

    def action_edit_sub_tasks(self) -> None:
        """Edit the sub-tasks of the selected entry."""
        entry = self._selected_entry()
        if not entry or self.editing_sub_tasks:
            return
        self.editing_sub_tasks = True
        self._open_input(
            f"Sub-tasks separated by '{SUB_TASK_SEPARATOR}' (empty removes them)",
            f"{SUB_TASK_SEPARATOR} ".join(entry.sub_tasks),
        )

    def _handle_add_entry_input(self, value: str) -> None:
        """Handle input for adding a new entry, written like an entry line."""
        if not value:
            return
        parsed = self.line_parser.parse_entry_line(f"- [ ] {value}", self.current_date)
        if not isinstance(parsed, Entry):
            self.set_status(f"[red]Not an entry:[/red] {parsed.message}")
            return
        entry = self.store.create_entry(
            self.current_date,
            start_time=parsed.start_time,
            end_time=parsed.end_time,
            title=parsed.title,
            link=parsed.link,
        )
        entry_widget = self.query_one(EntryListWidget)
        entry_widget.selected_index = len(entry_widget.entries) - 1
        self.refresh_entry_list()
        self.set_status(f"Added {entry.title!r}")

    def _handle_edit_title_input(self, value: str) -> None:
        """Handle input for editing the selected entry's title."""
        entry = self._selected_entry()
        if not value or not entry:
            return
        # "[label](url)" sets the link as well
        title, link = split_link(value)
        self.store.set_field(entry.entry_id, "title", title)
        if link:
            self.store.set_field(entry.entry_id, "link", link)
        self.refresh_entry_list()
        self.set_status("Title updated")

    def _handle_edit_link_input(self, value: str) -> None:
        """Handle input for the selected entry's link."""
        entry = self._selected_entry()
        if not entry:
            return
        self.store.set_field(entry.entry_id, "link", value)
        self.refresh_entry_list()
        self.set_status("Link updated" if value else "Link removed")

    def _handle_edit_sub_tasks_input(self, value: str) -> None:
        """Handle input for the selected entry's sub-tasks."""
        entry = self._selected_entry()
        if not entry:
            return
        sub_tasks = split_sub_tasks(value)
        self.store.set_field(entry.entry_id, "sub_tasks", sub_tasks)
        self.refresh_entry_list()
        self.set_status(f"{len(sub_tasks)} sub-task(s)")

    def _handle_set_time_input(self, value: str) -> None:
        """Handle input for the selected entry's time range."""
        entry = self._selected_entry()
        if not entry:
            return
        if value:
            time_range = parse_time_range(value)
            if time_range is None:
                self.set_status(f"[red]Invalid time range:[/red] {value}")
                return
            start_time, end_time = time_range
        else:
            start_time = end_time = None
        self.store.set_time_range(entry.entry_id, start_time, end_time)
        self.refresh_entry_list()
        self.set_status("Time updated" if value else "Time cleared")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle input submission by dispatching to appropriate handler."""
        value = event.value.strip()

        try:
            if self.adding_entry:
                self._handle_add_entry_input(value)
            elif self.editing_title:
                self._handle_edit_title_input(value)
            elif self.setting_time:
                self._handle_set_time_input(value)
            elif self.editing_link:
                self._handle_edit_link_input(value)
            elif self.editing_sub_tasks:
                self._handle_edit_sub_tasks_input(value)
        except InvalidOperation as e:
            self.set_status(f"[red]{e.message}[/red]")
        finally:
            self._clear_input_state()
            # Remove input widget
            event.input.remove()

    def _clear_input_state(self) -> None:
        """Clear all input mode state flags."""
        self.adding_entry = False
        self.editing_title = False
        self.setting_time = False
        self.editing_link = False
        self.editing_sub_tasks = False

    def on_key(self, event: events.Key) -> None:
        """Handle special keys."""
        # Check if we're in an input widget - if so, don't intercept
        focused = self.focused
        if isinstance(focused, Input):
            if event.key == "escape":
                focused.remove()
                self._clear_input_state()
                event.prevent_default()
            return

        if event.key != "q":
            self.quit_armed = False

        # Space and x both toggle completion
        if event.key == "space" or event.key == "x":
            self.action_toggle_complete()
            event.prevent_default()
            event.stop()


def main():
    """Run the application."""
    setup_logging()
    try:
        app = TimelineApp()
    except ParseError as e:
        # Strict parsing refuses to open a directory with unusable lines
        logger.error("Refusing to load: %s", e)
        raise SystemExit(f"ttimeline: {e}")
    app.run()


if __name__ == "__main__":
    main()
