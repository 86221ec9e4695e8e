"""Configuration settings for the timeline application."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration settings.

    Centralized configuration to avoid hardcoded values throughout the codebase.
    """
    # File system
    base_dir: Path = Path("~/timeline").expanduser()
    export_dir: Optional[Path] = None  # None means base_dir / "export"
    file_encoding: str = "utf-8"

    # Parsing
    strict_parsing: bool = False

    # Logging
    log_file: Path = Path("~/.ttimeline/ttimeline.log").expanduser()
    log_level: str = "INFO"

    # Timeline view
    timeline_start_hour: int = 8
    timeline_end_hour: int = 17
    timeline_step_minutes: int = 15

    # Colors
    color_primary: str = "#0abdc6"  # Cyan - primary accent
    color_accent: str = "#ff006e"  # Pink - selection highlight
    color_secondary: str = "#8b5cf6"  # Purple - secondary accent
    color_bg_dark: str = "#1a1a2e"  # Dark background
    color_bg_medium: str = "#2d2d44"  # Medium background
    color_text: str = "#e2e8f0"  # Light text

    @property
    def resolved_export_dir(self) -> Path:
        """Directory exported day files are written to."""
        if self.export_dir is None:
            return self.base_dir / "export"
        return self.export_dir

    @classmethod
    def load(cls) -> 'Config':
        """
        Load configuration.

        Starts from the defaults and applies TTIMELINE_* environment overrides.

        Returns:
            Config instance with default or loaded values
        """
        cfg = cls()
        env = os.environ

        if env.get("TTIMELINE_DIR"):
            cfg.base_dir = Path(env["TTIMELINE_DIR"]).expanduser()
        if env.get("TTIMELINE_EXPORT_DIR"):
            cfg.export_dir = Path(env["TTIMELINE_EXPORT_DIR"]).expanduser()
        if env.get("TTIMELINE_STRICT"):
            cfg.strict_parsing = _env_flag(env["TTIMELINE_STRICT"])
        if env.get("TTIMELINE_LOG_LEVEL"):
            cfg.log_level = env["TTIMELINE_LOG_LEVEL"].upper()
        if env.get("TTIMELINE_LOG_FILE"):
            cfg.log_file = Path(env["TTIMELINE_LOG_FILE"]).expanduser()

        return cfg


# Global config instance
config = Config.load()
