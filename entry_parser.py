"""Parse day files into timeline entries.

A day file is plain markdown. Entry lines are checklist items with an optional
time range and an optional link; bullets below an entry are its sub-tasks:

    - [x] 09:00 - 09:30 [Standup](https://meet.example.com/standup)
      - notes from yesterday
    - [ ] #### Buy groceries

Everything else in the file (headings, blank lines, prose) is ignored.
"""
import logging
import re
from datetime import date
from typing import Iterator, List, Optional, Tuple, Union

from exceptions import ParseError
from models import Entry, ParseResult, ParseWarning
from utils.time_utils import is_valid_clock

logger = logging.getLogger(__name__)

ENTRY_PREFIX = "- ["
SUBTASK_PREFIX = "-"

# "- [x]" followed by nothing, or by a space and the rest of the line
ENTRY_PATTERN = re.compile(r'^- \[(?P<mark>.)\](?: (?P<rest>.*))?$')
TIME_RANGE_PATTERN = re.compile(r'^(?P<start>\d{1,2}:\d{2}) - (?P<end>\d{1,2}:\d{2})(?: |$)')
CLOCK_TOKEN_PATTERN = re.compile(r'^\d{1,2}:\d{2}\b')
HEADING_PATTERN = re.compile(r'^####\s*')
# Label runs to the last "]("; the url may hold balanced parentheses
LINK_PATTERN = re.compile(r'^\[(?P<label>.*)\]\((?P<url>(?:[^()]|\([^()]*\))*)\)$')

CHECKBOX_MARKS = {"x": True, " ": False}

ParsedLine = Union[Entry, ParseWarning]


def split_link(text: str) -> Tuple[str, str]:
    """Split "[label](url)" into (label, url); other text is (text, "")."""
    match = LINK_PATTERN.match(text)
    if match:
        return match.group("label"), match.group("url")
    return text, ""


class EntryParser:
    """Parse the text of one day file into entries.

    Parsing is skip-and-continue: lines that look like entries but don't fit
    the grammar, and sub-task bullets with no entry above them, never become
    entries. Each one is reported as a ParseWarning instead. A strict parser
    raises ParseError on the first such line.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize EntryParser.

        Args:
            strict: Raise ParseError instead of reporting warnings
        """
        self.strict = strict

    def parse_entry_line(self, line: str, entry_date: date, line_number: int = 1) -> ParsedLine:
        """
        Parse a single entry line.

        Args:
            line: The line, with or without surrounding whitespace
            entry_date: Day the entry belongs to
            line_number: 1-based position used in the warning

        Returns:
            The Entry (with empty sub_tasks), or a ParseWarning when the
            line doesn't match the entry grammar
        """
        stripped = line.strip()
        malformed = ParseWarning(line_number, line, ParseWarning.MALFORMED_ENTRY)

        match = ENTRY_PATTERN.match(stripped)
        if not match or match.group("mark") not in CHECKBOX_MARKS:
            return malformed

        rest = match.group("rest") or ""
        start_time = end_time = None

        time_match = TIME_RANGE_PATTERN.match(rest)
        if time_match:
            start_time, end_time = time_match.group("start"), time_match.group("end")
            if not (is_valid_clock(start_time) and is_valid_clock(end_time)):
                return malformed
            rest = rest[time_match.end():]
        elif CLOCK_TOKEN_PATTERN.match(rest):
            # A lone time, or a range missing one side
            return malformed

        rest = HEADING_PATTERN.sub("", rest, count=1)
        title, link = split_link(rest)

        return Entry(
            date=entry_date,
            title=title,
            completed=CHECKBOX_MARKS[match.group("mark")],
            start_time=start_time,
            end_time=end_time,
            link=link,
            raw_content=line,
        )

    def iter_parse(self, text: str, entry_date: date) -> Iterator[ParsedLine]:
        """
        Walk a day file and yield entries and warnings in file order.

        An entry is yielded once it is closed, i.e. when the next entry line
        is seen or the text ends, so its sub_tasks are complete.

        Args:
            text: Full text of the day file
            entry_date: Day every entry belongs to

        Yields:
            Entry or ParseWarning objects
        """
        current: Optional[Entry] = None

        for line_number, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()

            if stripped.startswith(ENTRY_PREFIX):
                if current is not None:
                    yield current
                    current = None

                parsed = self.parse_entry_line(line, entry_date, line_number)
                if isinstance(parsed, Entry):
                    current = parsed
                else:
                    yield self._report(parsed)

            elif stripped.startswith(SUBTASK_PREFIX):
                if current is not None:
                    current.sub_tasks.append(stripped[2:])
                else:
                    yield self._report(
                        ParseWarning(line_number, line, ParseWarning.ORPHAN_SUBTASK)
                    )

        if current is not None:
            yield current

    def parse_with_warnings(self, text: str, entry_date: date) -> ParseResult:
        """
        Parse a day file, keeping the skipped lines.

        Args:
            text: Full text of the day file
            entry_date: Day every entry belongs to

        Returns:
            ParseResult with entries in file order and one warning per skipped line
        """
        result = ParseResult()
        for item in self.iter_parse(text, entry_date):
            if isinstance(item, Entry):
                result.entries.append(item)
            else:
                result.warnings.append(item)
        return result

    def parse(self, text: str, entry_date: date) -> List[Entry]:
        """Parse a day file into its entries, in file order."""
        return self.parse_with_warnings(text, entry_date).entries

    def _report(self, warning: ParseWarning) -> ParseWarning:
        if self.strict:
            raise ParseError(warning)
        logger.warning("Skipping line %d (%s): %r", warning.line_number, warning.reason, warning.raw)
        return warning


_default_parser = EntryParser()


def parse(text: str, entry_date: date) -> List[Entry]:
    """Parse a day file with the default, lenient parser."""
    return _default_parser.parse(text, entry_date)


def parse_with_warnings(text: str, entry_date: date) -> ParseResult:
    """Parse a day file with the default parser, keeping warnings."""
    return _default_parser.parse_with_warnings(text, entry_date)
