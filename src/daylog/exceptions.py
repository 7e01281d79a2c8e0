"""
Construction-time error hierarchy.

Only logger construction raises. Failures while writing a line are absorbed
and reported through :mod:`daylog.diagnostics`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DaylogError(Exception):
    """Root of every error raised by daylog."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(DaylogError):
    """A logger was requested with arguments that cannot describe a valid logger."""

    pass


class InvalidSinkMask(ConfigurationError):
    def __init__(self, mask: Any) -> None:
        super().__init__(
            f"Sink mask must be a non-negative int, got {mask!r}",
            code="INVALID_SINK_MASK",
            details={"mask": mask},
        )


class InvalidLoggerName(ConfigurationError):
    """The name cannot be used as a single directory component under the log root."""

    def __init__(self, name: Any, reason: str) -> None:
        super().__init__(
            f"Logger name {name!r} is not usable: {reason}",
            code="INVALID_LOGGER_NAME",
            details={"name": name, "reason": reason},
        )
