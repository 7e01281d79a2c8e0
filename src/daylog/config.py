"""
Logger Configuration.

All knobs are read from the environment with the ``DAYLOG_`` prefix
(or a ``.env`` file in the working directory).
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DaylogSettings(BaseSettings):
    """Filesystem layout, minimum level and diagnostics configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DAYLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    root_dir: str = Field(default="logs", description="Directory holding one sub-directory per logger name")
    dir_mode: int = Field(default=0o755, description="Permission bits for created log directories")
    file_mode: int = Field(default=0o660, description="Permission bits for created log files")
    level: LogLevel = Field(default=LogLevel.DEBUG, description="Minimum level that reaches the sinks")
    hold_file_open: bool = Field(
        default=False,
        description="Keep the day's file open between calls instead of reopening it per call",
    )
    diagnostic_tag: str = Field(default="daylog error", description="Prefix of self-diagnostic lines on stderr")

    @field_validator("dir_mode", "file_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: Any) -> Any:
        # "750" and "0o750" both mean octal when coming from the environment
        if isinstance(value, str):
            return int(value.strip().lower().removeprefix("0o"), 8)
        return value


# Singleton instance
settings = DaylogSettings()

__all__ = ["DaylogSettings", "LogLevel", "settings"]
