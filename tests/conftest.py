"""Pytest configuration and shared fixtures."""
import pytest
from datetime import date
from models import Entry
from business_logic.entry_store import EntryStore


DAY = date(2025, 1, 15)
NEXT_DAY = date(2025, 1, 16)


SAMPLE_DAY_TEXT = """# Wednesday

- [x] 09:00 - 09:30 [Standup](https://meet.example.com/standup)
  - blockers from yesterday
  - sprint goal

- [ ] 10:00 - 11:30 #### Write report

- [ ] Buy groceries
  - milk
"""


@pytest.fixture
def day():
    """Fixture providing the date used by most tests."""
    return DAY


@pytest.fixture
def sample_day_text():
    """Fixture providing the text of a well-formed day file."""
    return SAMPLE_DAY_TEXT


@pytest.fixture
def sample_entries():
    """Fixture providing entries spread over two days."""
    return [
        Entry(DAY, "Standup", completed=True, start_time="09:00", end_time="09:30",
              link="https://meet.example.com/standup", sub_tasks=["blockers"]),
        Entry(DAY, "Write report", start_time="10:00", end_time="11:30"),
        Entry(DAY, "Buy groceries", sub_tasks=["milk", "eggs"]),
        Entry(NEXT_DAY, "Dentist", start_time="08:00", end_time="08:45"),
        Entry(NEXT_DAY, "Call mom"),
    ]


@pytest.fixture
def store(sample_entries):
    """Fixture providing an EntryStore loaded with sample_entries."""
    return EntryStore(sample_entries)


@pytest.fixture
def empty_store():
    """Fixture providing an empty EntryStore."""
    return EntryStore()
