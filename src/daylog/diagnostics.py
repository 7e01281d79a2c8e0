"""
Self-diagnostics channel.

Failures inside the logger (a file that cannot be opened, a console stream
that refuses a write, a bad format string) are never raised to the
application. They are written here instead, one line each, to the process'
standard error::

    daylog error 15-03-2024 10:04:59 | could not write log file logger=api error=...
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import format_timestamp

DEFAULT_TAG = "daylog error"


class _StderrProxy:
    """File-like object bound to whatever ``sys.stderr`` is at write time."""

    def write(self, s: str) -> None:
        # None under pythonw and detached daemons
        if sys.stderr is not None:
            sys.stderr.write(s)

    def flush(self) -> None:
        if sys.stderr is not None:
            sys.stderr.flush()


_STDERR = _StderrProxy()


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["timestamp"] = format_timestamp(datetime.now())
    return event_dict


def render_diagnostic(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    tag = event_dict.pop("tag", None) or DEFAULT_TAG
    timestamp = event_dict.pop("timestamp")
    message = str(event_dict.pop("event", ""))
    extras = " ".join(f"{k}={v}" for k, v in event_dict.items())
    line = f"{tag} {timestamp} | {message}"
    return f"{line} {extras}" if extras else line


_diagnostic_logger = structlog.wrap_logger(
    structlog.PrintLogger(file=_STDERR),
    processors=[add_timestamp, render_diagnostic],
    wrapper_class=structlog.BoundLogger,
    context_class=dict,
    cache_logger_on_first_use=False,
)


def report(message: str, *, tag: str | None = None, **context: Any) -> None:
    """Write one diagnostic line to stderr. Best-effort: never raises."""
    try:
        _diagnostic_logger.error(message, tag=tag, **context)
    except Exception:
        # stderr itself is broken; there is nowhere left to report to
        pass
