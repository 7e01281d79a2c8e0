"""
Bridge from the standard library ``logging`` module.
"""

from __future__ import annotations

import logging

from .core import Logger


class DaylogHandler(logging.Handler):
    """
    Forward standard library records to a daylog :class:`~daylog.core.Logger`.

    Lets code written against ``logging.getLogger(...)`` land in the same
    console and daily file sinks::

        logging.getLogger("uvicorn").addHandler(DaylogHandler(new_logger(FILE, "api")))

    CRITICAL maps onto ERROR and anything below DEBUG onto DEBUG.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET):
        super().__init__(level)
        self.logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return

        if record.levelno >= logging.ERROR:
            self.logger.error(msg)
        elif record.levelno >= logging.WARNING:
            self.logger.warning(msg)
        elif record.levelno >= logging.INFO:
            self.logger.info(msg)
        else:
            self.logger.debug(msg)
