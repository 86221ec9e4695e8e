"""Preview screen showing the markdown a day will be exported as."""
from datetime import date

from rich.markup import escape
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Static
from textual.containers import VerticalScroll
from textual.binding import Binding
from textual import events

from business_logic.timeline import DaySummary
from utils.time_utils import export_filename, format_duration


class PreviewScreen(Screen):
    """Modal screen showing a day's serialized markdown."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    CSS = """
    PreviewScreen {
        align: center middle;
        background: rgba(26, 26, 46, 0.9);
    }

    #preview_container {
        width: 90;
        height: auto;
        max-height: 90%;
        background: #2d2d44;
        border: thick #0abdc6;
        padding: 1 2;
    }

    #preview_title {
        text-align: center;
        text-style: bold;
        color: #0abdc6;
        margin-bottom: 1;
    }

    #preview_content {
        height: auto;
        overflow-y: auto;
        color: #e2e8f0;
    }
    """

    def __init__(self, preview_date: date, markdown: str, summary: DaySummary):
        """
        Initialize preview screen.

        Args:
            preview_date: The day being previewed
            markdown: Serialized text of that day
            summary: Summary statistics of that day
        """
        super().__init__()
        self.preview_date = preview_date
        self.markdown = markdown
        self.summary = summary

    def compose(self) -> ComposeResult:
        """Compose the preview screen."""
        with VerticalScroll(id="preview_container"):
            yield Static(export_filename(self.preview_date), id="preview_title")
            yield Static(self.get_preview_text(), id="preview_content")

    def get_preview_text(self) -> str:
        """Get the summary line followed by the escaped markdown."""
        s = self.summary
        header = (
            f"[bold]{s.completed_entries}/{s.total_entries}[/bold] done [dim]•[/dim] "
            f"{format_duration(s.completed_minutes)} of {format_duration(s.planned_minutes)} planned"
        )
        body = escape(self.markdown) if self.markdown else "[dim](empty day)[/dim]"
        return f"{header}\n\n{body}\n[dim]Press Esc to close this preview[/dim]"

    def on_key(self, event: events.Key) -> None:
        """Handle key events - block all except Esc and arrow keys."""
        # Allow Esc (handled by binding) and arrow keys (for scrolling)
        if event.key not in ("escape", "up", "down"):
            event.prevent_default()
            event.stop()

    def action_dismiss(self) -> None:
        """Close the preview screen."""
        self.dismiss()
