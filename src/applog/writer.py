"""Writer adapter for feeding third-party output into an AppLogger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .entries import PlainText
from .levels import Level, describe

if TYPE_CHECKING:
    from .logger import AppLogger


class LoggedWriter:
    """A file-like object that records every write as one log entry.

    Hand it to anything that writes to a stream (a logging.StreamHandler,
    print(file=...), a subprocess pump) and the output goes through the same
    journal and display path as direct log calls. Each write() is one entry;
    the whole buffer is consumed.

    prefix() and level() return the writer for chaining, and should be
    applied before the writer is shared between threads.
    """

    def __init__(self, logger: AppLogger, prefix: str = "", level: Level = Level.DEBUG):
        self._logger = logger
        self._prefix = prefix
        self._level = level

    def prefix(self, prefix: str) -> LoggedWriter:
        self._prefix = prefix
        return self

    def level(self, level: Level) -> LoggedWriter:
        self._level = level
        return self

    def write(self, data: str | bytes) -> int:
        if isinstance(data, bytes | bytearray | memoryview):
            msg = bytes(data).decode("utf-8", errors="replace")
        else:
            msg = data
        if self._prefix:
            sep = "" if self._prefix[-1].isspace() else " "
            msg = f"{self._prefix}{sep}{msg}"

        self._logger.log_at(self._level, PlainText(msg))
        return len(data)

    def flush(self) -> None:
        pass

    def writable(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"LoggedWriter(prefix={self._prefix!r}, level={describe(self._level)})"
