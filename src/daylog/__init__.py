"""
Leveled logger with console and per-day file sinks.

Sinks are picked with a bitmask:
- CONSOLE_OUT: standard output
- CONSOLE_ERR: standard error
- FILE: logs/<name>/<DD-MM-YYYY>.log, reopened on every call

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog processor chain ending in a locked fan-out writer.
"""

from .core import Logger, new_logger
from .exceptions import ConfigurationError, DaylogError, InvalidLoggerName, InvalidSinkMask
from .interceptors import DaylogHandler
from .sinks import SinkMask

CONSOLE_OUT = SinkMask.CONSOLE_OUT
CONSOLE_ERR = SinkMask.CONSOLE_ERR
FILE = SinkMask.FILE

__all__ = [
    "CONSOLE_ERR",
    "CONSOLE_OUT",
    "FILE",
    "ConfigurationError",
    "DaylogError",
    "DaylogHandler",
    "InvalidLoggerName",
    "InvalidSinkMask",
    "Logger",
    "SinkMask",
    "new_logger",
]
