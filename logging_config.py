"""Logging setup for the timeline application.

The TUI owns the terminal, so records go to a rotating log file instead of
the console. Modules log through ``logging.getLogger(__name__)``.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(
    log_file: Optional[Path] = None,
    level: Optional[str] = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the root logger once.

    Args:
        log_file: Log file path. If None, uses config.log_file.
        level: Level name such as "DEBUG". If None, uses config.log_level.
        max_bytes: Size before the log file is rotated
        backup_count: Number of rotated files to keep

    Returns:
        The configured root logger
    """
    global _configured
    root = logging.getLogger()
    if _configured:
        return root

    log_file = Path(log_file) if log_file is not None else config.log_file
    level_name = (level or config.log_level).upper()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True

    root.debug("Logging configured at %s (%s)", level_name, log_file)
    return root
