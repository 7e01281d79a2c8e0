"""
Line rendering.

Every sink receives the same line::

    15-03-2024 10:04:59 | INFO | message text
"""

from __future__ import annotations

from datetime import datetime

from structlog.typing import EventDict, WrappedLogger

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"
DATE_FORMAT = "%d-%m-%Y"
SEPARATOR = " | "

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def format_timestamp(when: datetime) -> str:
    return when.strftime(TIMESTAMP_FORMAT)


def format_date(when: datetime) -> str:
    """Date component used for the daily file name."""
    return when.strftime(DATE_FORMAT)


def normalize_level(method_name: str) -> str:
    """Map a structlog method name onto one of the four fixed severities."""
    level = method_name.upper()
    if level == "WARN":
        return "WARNING"
    if level in ("CRITICAL", "EXCEPTION", "FATAL"):
        return "ERROR"
    if level in LEVELS:
        return level
    return "INFO"


_LINE_BREAKS = str.maketrans({"\r": "\\r", "\n": "\\n"})


def escape_line_breaks(message: str) -> str:
    """Keep a multi-line message on one physical line (``\\n`` and ``\\r`` are escaped)."""
    return message.translate(_LINE_BREAKS)


def format_line(when: datetime, level: str, message: str) -> str:
    return SEPARATOR.join([format_timestamp(when), level, escape_line_breaks(message)]) + "\n"


def render_line(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> tuple:
    """Final processor: hand the rendered line and its timestamp to the writer.

    Returning ``(args, kwargs)`` lets the writer receive the timestamp the
    line was rendered with, so the daily file is picked from the same instant.
    """
    when: datetime = event_dict["timestamp"]
    level = event_dict.get("level") or normalize_level(method_name)
    line = format_line(when, level, str(event_dict.get("event", "")))
    return (line,), {"when": when}
