"""Tests for EntryListWidget."""
import pytest
from datetime import date
from business_logic.entry_store import EntryStore
from models import Entry
from ui.entry_list_widget import EntryListWidget

DAY = date(2025, 1, 15)


@pytest.fixture
def day_store():
    """Store with one day of mixed entries."""
    return EntryStore([
        Entry(DAY, "Standup", start_time="09:00", end_time="09:15", completed=True),
        Entry(DAY, "Read [docs]", link="http://docs", sub_tasks=["chapter 1"]),
        Entry(DAY, "Early run", start_time="06:30", end_time="07:00"),
    ])


class TestEntryListWidget:
    """Test suite for EntryListWidget."""

    def test_init(self, day_store):
        """Test widget initialization."""
        widget = EntryListWidget(day_store, DAY)
        assert widget.selected_index == 0
        assert widget.view_mode == "list"
        assert len(widget.entries) == 3

    def test_render_empty_day(self, day_store):
        """Test rendering a day without entries."""
        widget = EntryListWidget(day_store, date(2025, 1, 1))
        output = widget.render()
        assert "No entries for this day" in output
        assert "Press 'a' to add one" in output

    def test_render_list(self, day_store):
        """Test rendering the list view."""
        output = EntryListWidget(day_store, DAY).render()
        assert "Standup" in output
        assert "09:00-09:15" in output
        assert "chapter 1" in output
        assert ">" in output  # Selection marker

    def test_render_completed_entry_strikethrough(self, day_store):
        """Test completed entries are struck through."""
        output = EntryListWidget(day_store, DAY).render()
        assert "[strike]Standup[/strike]" in output

    def test_render_escapes_markup(self, day_store):
        """Test that brackets in titles are escaped rather than read as markup."""
        output = EntryListWidget(day_store, DAY).render()
        assert "Read \\[docs]" in output

    def test_render_timeline(self, day_store):
        """Test that timed entries appear next to their slot and the rest below."""
        widget = EntryListWidget(day_store, DAY, view_mode="timeline")
        lines = widget.render().split("\n")

        assert any(line.startswith("09:00 │") and "Standup" in line for line in lines)
        assert "[bold]Other[/bold]" in lines
        other = lines[lines.index("[bold]Other[/bold]") + 1:]
        assert any("Early run" in line for line in other)
        assert any("Read" in line for line in other)

    def test_timeline_lists_timed_before_untimed(self, day_store):
        """Test that timed entries outside the slots come before untimed ones."""
        widget = EntryListWidget(day_store, DAY, view_mode="timeline")
        lines = widget.render().split("\n")
        other = lines[lines.index("[bold]Other[/bold]") + 1:]

        assert "Early run" in other[0]
        assert "Read" in other[1]

    def test_render_week(self, day_store):
        """Test a week heading, then one line per weekday with the current day marked."""
        widget = EntryListWidget(day_store, DAY, view_mode="week")
        lines = widget.render().split("\n")

        assert len(lines) == 8
        assert "Week 3, 2025" in lines[0]
        assert "1 of 7 days loaded" in lines[0]
        assert lines[3].startswith(">")
        assert "1/3 done" in lines[3]
        assert "no entries" in lines[1]

    def test_cycle_view(self, day_store):
        """Test cycling through all views back to list."""
        widget = EntryListWidget(day_store, DAY)
        assert widget.cycle_view() == "timeline"
        assert widget.cycle_view() == "week"
        assert widget.cycle_view() == "list"

    def test_move_selection_down(self, day_store):
        """Test moving selection down."""
        widget = EntryListWidget(day_store, DAY)
        widget.move_selection(1)
        assert widget.selected_index == 1

    def test_move_selection_bounds(self, day_store):
        """Test that selection stops at both ends."""
        widget = EntryListWidget(day_store, DAY)
        widget.move_selection(-1)
        assert widget.selected_index == 0
        widget.move_selection(10)
        assert widget.selected_index == 2

    def test_move_selection_empty_day(self, day_store):
        """Test moving selection on an empty day."""
        widget = EntryListWidget(day_store, date(2025, 1, 1))
        widget.move_selection(1)  # Should not crash
        assert widget.selected_index == 0

    def test_get_selected_entry_follows_reorder(self, day_store):
        """Test that the selection reads the store's current order."""
        widget = EntryListWidget(day_store, DAY)
        day_store.reorder(DAY, 2, 0)
        assert widget.get_selected_entry().title == "Early run"

    def test_clamp_selection_after_day_change(self, day_store):
        """Test that selection is clamped when the day gets shorter."""
        widget = EntryListWidget(day_store, DAY)
        widget.selected_index = 2
        widget.current_date = date(2025, 1, 1)
        widget.clamp_selection()
        assert widget.selected_index == 0
        assert widget.get_selected_entry() is None
