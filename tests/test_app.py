"""Tests for the edit inputs of TimelineApp."""
import asyncio
import pytest
from datetime import date
from textual.widgets import Input

from app import TimelineApp, split_sub_tasks
from markdown_handler import MarkdownHandler

DAY = date(2025, 1, 15)
DAY_TEXT = (
    "- [x] 09:00 - 09:30 Standup\n"
    "  - blockers\n"
    "\n"
    "- [ ] Read docs\n"
)


@pytest.fixture
def app(tmp_path):
    """App loaded from one day file; the first entry is selected."""
    (tmp_path / "2025-01-15-Wednesday.md").write_text(DAY_TEXT, encoding="utf-8")
    return TimelineApp(handler=MarkdownHandler(base_dir=tmp_path))


def submit(app, *steps):
    """Run the app once; for each (key, value) open that input, type and press enter."""
    async def scenario():
        async with app.run_test() as pilot:
            for key, value in steps:
                await pilot.press(key)
                await pilot.pause()
                app.query_one(Input).value = value
                await pilot.press("enter")
                await pilot.pause()

    asyncio.run(scenario())


def first_entry(app):
    return app.store.entries_for(DAY)[0]


class TestSplitSubTasks:
    """Test reading the sub-task input."""

    def test_split_and_strip(self):
        """Test that items are separated by ';' and trimmed."""
        assert split_sub_tasks("milk; eggs ;bread") == ["milk", "eggs", "bread"]

    def test_blank_items_dropped(self):
        """Test that empty items and empty input give no sub-tasks."""
        assert split_sub_tasks("milk;; ") == ["milk"]
        assert split_sub_tasks("") == []


class TestEditInputs:
    """Test that edit inputs change the selected entry through the store."""

    def test_load_selects_newest_day(self, app):
        """Test the app opens on the loaded day, clean."""
        assert app.current_date == DAY
        assert app.store.dirty is False

    def test_edit_link(self, app):
        """Test setting a link on the selected entry."""
        submit(app, ("l", "https://meet.example.com"))

        assert first_entry(app).link == "https://meet.example.com"
        assert app.store.dirty is True

    def test_edit_link_empty_removes_it(self, app):
        """Test that an empty link input removes the link."""
        submit(app, ("l", "http://x"), ("l", ""))
        assert first_entry(app).link == ""

    def test_edit_sub_tasks(self, app):
        """Test replacing the sub-tasks of the selected entry."""
        submit(app, ("u", "blockers; demo prep"))
        assert first_entry(app).sub_tasks == ["blockers", "demo prep"]

    def test_edit_title_as_link(self, app):
        """Test that a title typed as a markdown link also sets the link."""
        submit(app, ("r", "[Standup](https://meet.example.com)"))

        entry = first_entry(app)
        assert entry.title == "Standup"
        assert entry.link == "https://meet.example.com"

    def test_edit_plain_title_keeps_link(self, app):
        """Test that a plain title leaves an existing link alone."""
        submit(app, ("l", "http://x"), ("r", "Daily standup"))

        entry = first_entry(app)
        assert entry.title == "Daily standup"
        assert entry.link == "http://x"

    def test_set_time_range(self, app):
        """Test replacing the time range of the selected entry."""
        submit(app, ("t", "10:00 - 10:30"))
        entry = first_entry(app)
        assert (entry.start_time, entry.end_time) == ("10:00", "10:30")

    def test_clear_time_range(self, app):
        """Test that an empty time input clears both ends."""
        submit(app, ("t", ""))
        assert first_entry(app).is_timed is False

    def test_invalid_time_range_leaves_entry(self, app):
        """Test that a bad time range changes nothing."""
        submit(app, ("t", "10:00"))
        entry = first_entry(app)
        assert (entry.start_time, entry.end_time) == ("09:00", "09:30")
        assert app.store.dirty is False

    def test_add_entry_with_link(self, app):
        """Test adding an entry written like an entry line."""
        submit(app, ("a", "11:00 - 11:15 [Review](http://pr)"))

        added = app.store.entries_for(DAY)[-1]
        assert added.title == "Review"
        assert added.link == "http://pr"
        assert (added.start_time, added.end_time) == ("11:00", "11:15")
