"""Custom UI widgets for the timeline."""
from textual.widgets import Static

DEFAULT_HINT = "[dim]Press[/dim] [bold]H[/bold] [dim]for Help  •  [/dim][bold]Q[/bold] [dim]to Quit[/dim]"


class CenteredFooter(Static):
    """Custom footer with centered content."""

    def __init__(self):
        super().__init__()
        self.update(DEFAULT_HINT)

    def show_status(self, message: str, unsaved: bool = False) -> None:
        """Show a status message, flagged when there are unsaved changes."""
        prefix = "[yellow]●[/yellow] " if unsaved else ""
        self.update(f"{prefix}{message}  [dim]•[/dim]  {DEFAULT_HINT}")

    DEFAULT_CSS = """
    CenteredFooter {
        background: transparent;
        color: #0abdc6;
        dock: bottom;
        height: 1;
        text-align: center;
        border: thick #0abdc6;
    }
    """
