"""Handle reading day files and writing exported days."""
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from business_logic.entry_store import EntryStore
from config import config
from entry_parser import EntryParser
from entry_serializer import serialize, serialize_by_date
from exceptions import ExportError, ParseError
from models import Entry, ParseWarning
from utils.time_utils import date_from_filename, export_filename

logger = logging.getLogger(__name__)


@dataclass
class FileFailure:
    """A day file that could not be read or decoded."""
    path: Path
    error: str


@dataclass
class LoadResult:
    """Everything produced by loading a set of day files."""
    entries: List[Entry] = field(default_factory=list)
    warnings: Dict[Path, List[ParseWarning]] = field(default_factory=dict)
    failures: List[FileFailure] = field(default_factory=list)
    source_files: List[Path] = field(default_factory=list)


class MarkdownHandler:
    """Read day files into entries and write days back out."""

    def __init__(
        self,
        base_dir: Optional[str] = None,
        export_dir: Optional[str] = None,
        parser: Optional[EntryParser] = None,
    ):
        """
        Initialize MarkdownHandler.

        Args:
            base_dir: Directory holding the day files. If None, uses config.base_dir.
            export_dir: Directory exported days are written to.
                If None, uses config.resolved_export_dir.
            parser: Parser to use. If None, one is built from config.strict_parsing.
        """
        if base_dir is None:
            self.base_dir = config.base_dir
        else:
            self.base_dir = Path(base_dir).expanduser()

        if export_dir is not None:
            self.export_dir = Path(export_dir).expanduser()
        elif base_dir is None:
            self.export_dir = config.resolved_export_dir
        else:
            self.export_dir = self.base_dir / "export"

        self.parser = parser or EntryParser(strict=config.strict_parsing)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def is_day_file(path: Path) -> bool:
        """True if the file name follows the YYYY-MM-DD-<suffix>.md convention."""
        return date_from_filename(Path(path).name) is not None

    def list_day_files(self) -> List[Path]:
        """
        List the day files in base_dir.

        Returns:
            Paths of matching files, newest date first
        """
        files = [path for path in self.base_dir.iterdir() if path.is_file()]
        return self._sort_day_files(files)

    def _sort_day_files(self, paths: Iterable[Path]) -> List[Path]:
        day_files = [Path(path) for path in paths if self.is_day_file(Path(path))]
        # Newest day first; same-day files in name order
        day_files.sort(key=lambda path: path.name)
        day_files.sort(key=lambda path: date_from_filename(path.name), reverse=True)
        return day_files

    def load_files(self, paths: Sequence[Path]) -> LoadResult:
        """Load a set of day files.

        Files whose names don't follow the day-file convention are skipped.
        Each remaining file is parsed with the date taken from its name. A
        file that can't be read or decoded is recorded in failures and the
        rest of the batch is still loaded.

        Args:
            paths: Candidate file paths

        Returns:
            LoadResult with entries (newest day first, file order within a
            day), parse warnings per file and per-file failures

        Note:
            A strict parser's ParseError propagates to the caller.
        """
        result = LoadResult()

        for path in self._sort_day_files(paths):
            entry_date = date_from_filename(path.name)
            try:
                content = path.read_text(encoding=config.file_encoding)
            except (OSError, UnicodeDecodeError) as e:
                # Unreadable file: report it and keep loading the others
                logger.error("Failed to read %s: %s", path, e)
                result.failures.append(FileFailure(path=path, error=str(e)))
                continue

            try:
                parsed = self.parser.parse_with_warnings(content, entry_date)
            except ParseError:
                logger.error("Strict parsing rejected %s", path)
                raise
            result.entries.extend(parsed.entries)
            result.source_files.append(path)
            if parsed.warnings:
                result.warnings[path] = parsed.warnings
                logger.warning("%s: skipped %d line(s)", path.name, len(parsed.warnings))

        logger.info(
            "Loaded %d entries from %d file(s), %d failure(s)",
            len(result.entries), len(result.source_files), len(result.failures)
        )
        return result

    def load_directory(self) -> LoadResult:
        """Load every day file in base_dir."""
        return self.load_files(self.list_day_files())

    def load_into(self, store: EntryStore, paths: Optional[Sequence[Path]] = None) -> LoadResult:
        """
        Load day files and replace the store's contents with them.

        Args:
            store: Store to fill
            paths: Files to load. If None, every day file in base_dir.

        Returns:
            The LoadResult, for reporting warnings and failures
        """
        result = self.load_directory() if paths is None else self.load_files(paths)
        store.load(result.entries)
        return result

    def get_export_path(self, entry_date: date) -> Path:
        """Get the export path for a date (YYYY-MM-DD-<Weekday>.md)."""
        return self.export_dir / export_filename(entry_date)

    def export_date(self, entry_date: date, entries: Sequence[Entry]) -> Path:
        """Write one day to its export file.

        Creates the file if it doesn't exist; overwrites if it does.

        Args:
            entry_date: The day being written
            entries: That day's entries in order

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        return self._write_day(entry_date, serialize(entries))

    def _write_day(self, entry_date: date, content: str) -> Path:
        file_path = self.get_export_path(entry_date)
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding=config.file_encoding)
        except OSError as e:
            raise ExportError(f"Failed to export {entry_date} to {file_path}: {e}", str(file_path)) from e

        logger.info("Exported %s to %s", entry_date, file_path)
        return file_path

    def export_store(self, store: EntryStore) -> List[Path]:
        """
        Export every day in the store, one file per date.

        Days are written one after another in date order. The store is only
        marked clean once all of them were written.

        Args:
            store: Store to export

        Returns:
            Paths of the written files

        Raises:
            ExportError: On the first day that cannot be written; the store
                stays dirty
        """
        texts = serialize_by_date(store.group_by_date())
        written = [self._write_day(entry_date, texts[entry_date]) for entry_date in sorted(texts)]
        store.clear_dirty()
        return written
