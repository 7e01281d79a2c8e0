"""
Daily log file resolution.

Layout::

    <root_dir>/<logger name>/<DD-MM-YYYY>.log
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import TextIO

from .formatters import format_date

_OPEN_FLAGS = os.O_CREAT | os.O_APPEND | os.O_WRONLY


class FileSinkResolver:
    """Computes and opens the dated log file of a logger.

    The date is taken from the instant passed in by the caller, never from
    construction time, so a long-lived logger moves to a new file at local
    midnight on its own.

    Args:
        root_dir: Directory holding one sub-directory per logger name.
        dir_mode: Permission bits for directories created on demand.
        file_mode: Permission bits for files created on demand.
    """

    def __init__(self, root_dir: str | Path = "logs", *, dir_mode: int = 0o755, file_mode: int = 0o660):
        self._root = Path(root_dir)
        self._dir_mode = dir_mode
        self._file_mode = file_mode

    @property
    def root(self) -> Path:
        return self._root

    def directory(self, name: str) -> Path:
        return self._root / name

    def path_for(self, name: str, when: datetime) -> Path:
        return self.directory(name) / f"{format_date(when)}.log"

    def ensure_directory(self, name: str) -> Path:
        """Create the logger's directory and its parents.

        An already-existing directory is fine, including one created by a
        concurrent caller between the check and the mkdir. A regular file in
        the way raises ``FileExistsError``.
        """
        path = self.directory(name)
        path.mkdir(mode=self._dir_mode, parents=True, exist_ok=True)
        return path

    def resolve(self, name: str, when: datetime) -> TextIO:
        """Open the file for ``when`` in append mode, creating it if absent.

        Raises:
            OSError: the directory cannot be created or the file cannot be opened.
        """
        self.ensure_directory(name)
        fd = os.open(self.path_for(name, when), _OPEN_FLAGS, self._file_mode)
        try:
            return os.fdopen(fd, "a", encoding="utf-8", errors="backslashreplace")
        except BaseException:
            os.close(fd)
            raise
