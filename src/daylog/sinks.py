"""
Sink abstractions and concrete implementations.
"""

from __future__ import annotations

import enum
import sys
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, Iterable, TextIO

from .resolver import FileSinkResolver


class SinkMask(enum.IntFlag):
    """Destinations a logger writes to, combined with ``|``."""

    CONSOLE_OUT = 1
    CONSOLE_ERR = 2
    FILE = 4

    @classmethod
    def coerce(cls, value: int) -> "SinkMask":
        """Keep the recognized bits; with none recognized fall back to ``CONSOLE_OUT``."""
        known = int(value) & int(cls.CONSOLE_OUT | cls.CONSOLE_ERR | cls.FILE)
        return cls(known) if known else cls.CONSOLE_OUT


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    label: str = "sink"

    @abstractmethod
    def emit(self, line: str, when: datetime) -> None:
        """Append one complete line to the destination."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StreamSink(BaseSink):
    """Console sink.

    Args:
        stream_name: ``"stdout"`` or ``"stderr"``; looked up on :mod:`sys` at
            every write so a replaced stream (redirection, capture) is honored.
        stream: Fixed stream to use instead of the lookup.
    """

    def __init__(self, stream_name: str = "stdout", stream: TextIO | None = None):
        self._stream_name = stream_name
        self._stream = stream
        self.label = stream_name

    @property
    def stream(self) -> TextIO | None:
        if self._stream is not None:
            return self._stream
        return getattr(sys, self._stream_name)

    def emit(self, line: str, when: datetime) -> None:
        stream = self.stream
        if stream is None:
            raise OSError(f"sys.{self._stream_name} is not available")
        stream.write(line)
        stream.flush()

    def close(self) -> None:
        pass


class MultiSink(BaseSink):
    """Several sinks behind one write.

    Each member gets the same line. A member that fails is handed to
    ``on_error`` and the remaining members are still written.
    """

    label = "console"

    def __init__(self, sinks: Iterable[BaseSink], on_error: Callable[[BaseSink, Exception], None]):
        self._sinks = list(sinks)
        self._on_error = on_error

    @property
    def sinks(self) -> list[BaseSink]:
        return list(self._sinks)

    def emit(self, line: str, when: datetime) -> None:
        for sink in self._sinks:
            try:
                sink.emit(line, when)
            except Exception as exc:
                self._on_error(sink, exc)

    def close(self) -> None:
        for sink in self._sinks:
            sink.close()


class DailyFileSink(BaseSink):
    """Sink writing to ``<root>/<name>/<DD-MM-YYYY>.log``.

    By default the file is opened, appended to and closed on every emit, so
    the date partition is always fresh. With ``hold_open`` the handle is kept
    between calls and swapped when the date of the line changes.
    """

    label = "file"

    def __init__(self, name: str, resolver: FileSinkResolver, *, hold_open: bool = False):
        self._name = name
        self._resolver = resolver
        self._hold_open = hold_open
        self._file: TextIO | None = None
        self._file_date: date | None = None

    def emit(self, line: str, when: datetime) -> None:
        if not self._hold_open:
            with self._resolver.resolve(self._name, when) as fh:
                fh.write(line)
            return

        if self._file is None or self._file_date != when.date():
            self.close()
            self._file = self._resolver.resolve(self._name, when)
            self._file_date = when.date()
        try:
            self._file.write(line)
            self._file.flush()
        except Exception:
            # drop the handle, the next line reopens it
            self.close()
            raise

    def close(self) -> None:
        fh, self._file, self._file_date = self._file, None, None
        if fh is not None:
            try:
                fh.close()
            except OSError:
                pass
