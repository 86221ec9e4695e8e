"""Write timeline entries back to day-file markdown."""
from datetime import date
from typing import Dict, List, Mapping, Sequence

from models import Entry


def serialize(entries: Sequence[Entry]) -> str:
    """
    Convert entries to the text of a day file.

    Each entry becomes its entry line followed by its sub-task bullets;
    blocks are separated by a blank line. The output parses back into equal
    entries for the same date.

    Entries are written in the order given. Passing entries of several dates
    is allowed and yields one undifferentiated block; call once per date to
    get one file per day.

    Args:
        entries: Entries of one day, in display order

    Returns:
        Markdown text ("" for no entries)
    """
    return "\n".join(entry.to_markdown() for entry in entries)


def serialize_by_date(groups: Mapping[date, List[Entry]]) -> Dict[date, str]:
    """Serialize each date group of a store separately."""
    return {entry_date: serialize(entries) for entry_date, entries in groups.items()}
