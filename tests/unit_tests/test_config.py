"""
Settings unit tests.

Covers defaults, DAYLOG_ environment variables, .env files and octal modes.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from daylog.config import DaylogSettings, LogLevel


class TestDefaults:
    """Built-in defaults"""

    def test_defaults(self, workdir) -> None:
        """Verify the layout and diagnostics defaults."""
        cfg = DaylogSettings()
        assert cfg.root_dir == "logs"
        assert cfg.dir_mode == 0o755
        assert cfg.file_mode == 0o660
        assert cfg.level is LogLevel.DEBUG
        assert cfg.hold_file_open is False
        assert cfg.diagnostic_tag == "daylog error"

    def test_frozen(self, workdir) -> None:
        """Settings cannot be changed after construction"""
        cfg = DaylogSettings()
        with pytest.raises(ValidationError):
            cfg.root_dir = "elsewhere"


class TestEnvironment:
    """Environment and .env sources"""

    def test_prefixed_variables_are_read(self, workdir, monkeypatch: pytest.MonkeyPatch) -> None:
        """DAYLOG_-prefixed variables override the defaults"""
        monkeypatch.setenv("DAYLOG_ROOT_DIR", "/var/log/app")
        monkeypatch.setenv("DAYLOG_LEVEL", "WARNING")
        monkeypatch.setenv("DAYLOG_HOLD_FILE_OPEN", "true")
        cfg = DaylogSettings()
        assert cfg.root_dir == "/var/log/app"
        assert cfg.level is LogLevel.WARNING
        assert cfg.hold_file_open is True

    @pytest.mark.parametrize(("raw", "expected"), [("750", 0o750), ("0o700", 0o700), ("0640", 0o640)])
    def test_modes_are_octal_strings(self, workdir, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        """Modes given as strings are parsed as octal"""
        monkeypatch.setenv("DAYLOG_DIR_MODE", raw)
        assert DaylogSettings().dir_mode == expected

    def test_dotenv_file_is_read(self, workdir) -> None:
        """A .env file in the working directory is honored"""
        (workdir / ".env").write_text("DAYLOG_DIAGNOSTIC_TAG=from-dotenv\n", encoding="utf-8")
        assert DaylogSettings().diagnostic_tag == "from-dotenv"

    def test_init_arguments_win(self, workdir, monkeypatch: pytest.MonkeyPatch) -> None:
        """Explicit arguments take precedence over the environment"""
        monkeypatch.setenv("DAYLOG_ROOT_DIR", "/var/log/app")
        assert DaylogSettings(root_dir="here").root_dir == "here"

    def test_int_mode_kept_as_is(self, workdir) -> None:
        assert DaylogSettings(file_mode=0o600).file_mode == 0o600
