"""
Logger construction and leveled operations.
"""

from __future__ import annotations

import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import structlog
from structlog.typing import EventDict, WrappedLogger

from . import config, diagnostics
from .caller import caller_name
from .exceptions import InvalidLoggerName, InvalidSinkMask
from .formatters import normalize_level, render_line
from .resolver import FileSinkResolver
from .sinks import SinkMask
from .writer import FanOutWriter

Clock = Callable[[], datetime]


# =============================================================================
# Structlog Processors
# =============================================================================


def add_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["level"] = normalize_level(method_name)
    return event_dict


class _Timestamper:
    """Captures the instant of the call from the logger's clock."""

    def __init__(self, clock: Clock):
        self._clock = clock

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["timestamp"] = self._clock()
        return event_dict


class _SerializedWriter:
    """End of the processor chain: one lock around the whole fan-out."""

    def __init__(self, writer: FanOutWriter, lock: threading.Lock):
        self._writer = writer
        self._lock = lock
        self.closed = False

    def write(self, line: str, *, when: datetime | None = None) -> None:
        with self._lock:
            if not self.closed:
                self._writer.write(line, when=when)

    msg = debug = info = warning = warn = error = critical = exception = write

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            self._writer.close()


# =============================================================================
# Validation
# =============================================================================


def _validate_mask(sink_mask: Any) -> SinkMask:
    if isinstance(sink_mask, bool) or not isinstance(sink_mask, int) or sink_mask < 0:
        raise InvalidSinkMask(sink_mask)
    return SinkMask.coerce(sink_mask)


def _validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidLoggerName(name, "must be a string")
    if not name.strip():
        raise InvalidLoggerName(name, "must not be empty")
    if name in (".", ".."):
        raise InvalidLoggerName(name, "must not be a relative directory reference")
    separators = {"/", "\0", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators):
        raise InvalidLoggerName(name, "must not contain path separators")
    return name


# =============================================================================
# Logger
# =============================================================================


class Logger:
    """Leveled logger writing each line to the sinks selected by ``sink_mask``.

    Every operation formats ``"<DD-MM-YYYY HH:MM:SS> | <LEVEL> | <message>"``,
    then writes it to all enabled sinks while holding the logger's lock, so
    concurrent callers never interleave partial lines and every sink sees the
    lines in the same order. No operation raises; internal failures are
    reported on stderr through :mod:`daylog.diagnostics`.

    Args:
        sink_mask: Bitwise OR of ``CONSOLE_OUT``, ``CONSOLE_ERR`` and ``FILE``.
        name: Directory name under the log root. Defaults to the caller's name.
        settings: Configuration to use instead of :data:`daylog.config.settings`.
        clock: Source of the per-call timestamp, ``datetime.now`` by default.

    Raises:
        InvalidSinkMask: ``sink_mask`` is negative or not an int.
        InvalidLoggerName: ``name`` cannot be used as a directory name.
    """

    def __init__(
        self,
        sink_mask: int = SinkMask.CONSOLE_OUT,
        name: str | None = None,
        *,
        settings: config.DaylogSettings | None = None,
        clock: Clock | None = None,
    ):
        cfg = settings or config.settings
        self._mask = _validate_mask(sink_mask)
        self._name = _validate_name(name) if name is not None else caller_name()
        self._diagnostic_tag = cfg.diagnostic_tag
        self._lock = threading.Lock()

        self._resolver = FileSinkResolver(cfg.root_dir, dir_mode=cfg.dir_mode, file_mode=cfg.file_mode)
        self._writer = FanOutWriter(
            self._name,
            self._mask,
            self._resolver,
            hold_open=cfg.hold_file_open,
            diagnostic_tag=cfg.diagnostic_tag,
        )
        self._sink = _SerializedWriter(self._writer, self._lock)
        self._log = structlog.wrap_logger(
            self._sink,
            processors=[add_level, _Timestamper(clock or datetime.now), render_line],
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level.value, logging.DEBUG)),
            context_class=dict,
            cache_logger_on_first_use=False,
        )

        if self._mask & SinkMask.FILE:
            self._bootstrap_directory()

    @property
    def name(self) -> str:
        return self._name

    @property
    def mask(self) -> SinkMask:
        return self._mask

    @property
    def closed(self) -> bool:
        return self._sink.closed

    def directory(self) -> Path:
        """Directory holding this logger's daily files."""
        return self._resolver.directory(self._name)

    def file_path(self, when: datetime | None = None) -> Path:
        """Daily file a line logged at ``when`` (default: now) goes to."""
        return self._resolver.path_for(self._name, when or datetime.now())

    # -------------------------------------------------------------------------
    # Leveled operations
    # -------------------------------------------------------------------------

    def debug(self, message: str) -> None:
        self._dispatch("debug", message)

    def info(self, message: str) -> None:
        self._dispatch("info", message)

    def warning(self, message: str) -> None:
        self._dispatch("warning", message)

    def error(self, message: str) -> None:
        self._dispatch("error", message)

    def debugf(self, fmt: str, *args: Any) -> None:
        self._dispatch("debug", fmt, *args)

    def infof(self, fmt: str, *args: Any) -> None:
        self._dispatch("info", fmt, *args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self._dispatch("warning", fmt, *args)

    def errorf(self, fmt: str, *args: Any) -> None:
        """Log ``fmt % args`` at ERROR level."""
        self._dispatch("error", fmt, *args)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the file handle, if held. Later calls are dropped."""
        self._sink.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, mask={self._mask!r})"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _dispatch(self, method: str, message: str, *args: Any) -> None:
        if self._sink.closed:
            return
        try:
            getattr(self._log, method)(message, *args)
        except Exception as exc:
            # a logging call must never take the application down
            diagnostics.report(
                f"an error occurred while logging a {method} message: {exc!r}",
                tag=self._diagnostic_tag,
                logger=self._name,
            )

    def _bootstrap_directory(self) -> None:
        try:
            self._resolver.ensure_directory(self._name)
        except OSError as exc:
            diagnostics.report(
                f"could not prepare log directory {self.directory()}: {exc}",
                tag=self._diagnostic_tag,
                logger=self._name,
            )


def new_logger(
    sink_mask: int,
    name: str | None = None,
    *,
    settings: config.DaylogSettings | None = None,
    clock: Clock | None = None,
) -> Logger:
    """Create a logger writing to the sinks in ``sink_mask``.

    Without ``name`` the logger is named after the calling function.
    """
    return Logger(sink_mask, name, settings=settings, clock=clock)
