"""Tests for configuration loading."""
from pathlib import Path
from config import Config


class TestConfig:
    """Test Config defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        """Test the default configuration."""
        for name in ("TTIMELINE_DIR", "TTIMELINE_EXPORT_DIR", "TTIMELINE_STRICT",
                     "TTIMELINE_LOG_LEVEL", "TTIMELINE_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        cfg = Config.load()

        assert cfg.base_dir == Path("~/timeline").expanduser()
        assert cfg.resolved_export_dir == cfg.base_dir / "export"
        assert cfg.strict_parsing is False
        assert cfg.timeline_start_hour == 8
        assert cfg.timeline_end_hour == 17

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test that TTIMELINE_* variables override the defaults."""
        monkeypatch.setenv("TTIMELINE_DIR", str(tmp_path / "days"))
        monkeypatch.setenv("TTIMELINE_EXPORT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("TTIMELINE_STRICT", "yes")
        monkeypatch.setenv("TTIMELINE_LOG_LEVEL", "debug")

        cfg = Config.load()

        assert cfg.base_dir == tmp_path / "days"
        assert cfg.resolved_export_dir == tmp_path / "out"
        assert cfg.strict_parsing is True
        assert cfg.log_level == "DEBUG"

    def test_strict_flag_false_values(self, monkeypatch):
        """Test that other values leave strict parsing off."""
        monkeypatch.setenv("TTIMELINE_STRICT", "0")
        assert Config.load().strict_parsing is False
