"""Help screen widget showing keyboard shortcuts."""
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Static
from textual.containers import VerticalScroll
from textual.binding import Binding
from textual import events


class HelpScreen(Screen):
    """Modal screen showing keyboard shortcuts."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
        background: rgba(26, 26, 46, 0.9);
    }

    #help_container {
        width: 80;
        height: auto;
        max-height: 90%;
        background: #2d2d44;
        border: thick #0abdc6;
        padding: 1 2;
    }

    #help_title {
        text-align: center;
        text-style: bold;
        color: #0abdc6;
        margin-bottom: 1;
    }

    #help_content {
        height: auto;
        overflow-y: auto;
        color: #e2e8f0;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        with VerticalScroll(id="help_container"):
            yield Static("Keyboard Shortcuts", id="help_title")
            yield Static(self.get_help_text(), id="help_content")

    def get_help_text(self) -> str:
        """Get formatted help text."""
        return """[bold]Navigation[/bold]
↑/↓ or j/k    Move selection up/down
←/→           Previous/next loaded day
Shift+←       Previous day with open entries
Shift+→       Next day with open entries
v             Cycle list / timeline / week view

[bold]Entries[/bold]
a             Add entry to the current day
              • Optional time range first: 09:00 - 09:30 Standup
              • Links as markdown: [Standup](https://...)
r             Edit title of selected entry
              • [Label](https://...) also sets the link
l             Set link of selected entry (empty removes it)
u             Edit sub-tasks, separated by ; (empty removes them)
t             Set time range of selected entry (e.g. 10:00 - 10:45)
              • Empty input clears the time range
Space or x    Toggle completion
Shift+↑       Move entry up within the day
Shift+↓       Move entry down within the day

[bold]Files[/bold]
p             Preview the day's markdown
s             Export every day (YYYY-MM-DD-Weekday.md)
q             Quit (press twice if there are unsaved changes)

[bold]General[/bold]
h             Show this help

[dim]Press Esc to close this help[/dim]"""

    def on_key(self, event: events.Key) -> None:
        """Handle key events - block all except Esc and arrow keys."""
        # Allow Esc (handled by binding) and arrow keys (for scrolling)
        if event.key not in ("escape", "up", "down"):
            event.prevent_default()
            event.stop()

    def action_dismiss(self) -> None:
        """Close the help screen."""
        self.dismiss()
