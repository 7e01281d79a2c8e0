from __future__ import annotations

import typing as t
from datetime import datetime
from pathlib import Path

import pytest

from daylog.config import DaylogSettings

TIMESTAMP_PATTERN = r"\d{2}-\d{2}-\d{4} \d{2}:\d{2}:\d{2}"


class FakeClock:
    """Clock returning queued instants, then repeating the last one."""

    def __init__(self, *instants: datetime):
        self._instants = list(instants)
        self._last = instants[-1] if instants else datetime.now()

    def push(self, instant: datetime) -> None:
        self._instants.append(instant)

    def __call__(self) -> datetime:
        if self._instants:
            self._last = self._instants.pop(0)
        return self._last


@pytest.fixture(scope="function")
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so the default ``logs/`` root lands in it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="function")
def log_settings(workdir: Path) -> DaylogSettings:
    return DaylogSettings(root_dir=str(workdir / "logs"))


@pytest.fixture(scope="function")
def read_lines() -> t.Callable[[Path], list[str]]:
    def _read(path: Path) -> list[str]:
        return path.read_text(encoding="utf-8").splitlines()

    return _read


@pytest.fixture(scope="function")
def fake_clock() -> type[FakeClock]:
    return FakeClock
