"""Exceptions raised by the timeline core."""
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from models import ParseWarning


class TimelineError(Exception):
    """Base exception for all timeline errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ParseError(TimelineError):
    """Raised by a strict parser on the first line it cannot use."""

    def __init__(self, warning: 'ParseWarning') -> None:
        super().__init__(
            f"Line {warning.line_number}: {warning.message}",
            "PARSE_ERROR",
            {"line_number": warning.line_number, "raw": warning.raw, "reason": warning.reason}
        )
        self.warning = warning


class InvalidOperation(TimelineError):
    """Raised when a store operation cannot be applied."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "INVALID_OPERATION", details)


class ExportError(TimelineError, IOError):
    """Raised when a day file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message, "EXPORT_ERROR", {"path": path})
        self.path = path
