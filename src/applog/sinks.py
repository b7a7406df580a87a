"""Output sinks.

A sink is any text stream: an object with write(str), optionally flush().
create_writer turns a symbolic destination into one.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, NoReturn, Protocol, TextIO, runtime_checkable

from .log import get_logger

_log = get_logger("sinks")

# Suitable for appending to a log file
LOG_FILE_FLAGS = os.O_CREAT | os.O_APPEND | os.O_RDWR

# Owner-only access
LOG_FILE_MODE = 0o600


@runtime_checkable
class Sink(Protocol):
    def write(self, s: str, /) -> int: ...


class DiscardSink:
    """A sink that drops everything written to it."""

    def write(self, s: str, /) -> int:
        return len(s)

    def flush(self) -> None:
        pass

    def __repr__(self) -> str:
        return "DiscardSink()"


def open_log_file(path: str | os.PathLike[str]) -> TextIO:
    """Open (creating if needed) an append-only, owner-only log file."""
    fd = os.open(path, LOG_FILE_FLAGS, LOG_FILE_MODE)
    return os.fdopen(fd, "a", encoding="utf-8")


def create_writer(target: Any) -> Sink:
    """Resolve a destination into a sink.

    - a sink is returned as-is
    - "" discards output
    - "stdout" / "stderr" (any case) are the standard streams
    - any other string or path is opened as an append-only log file

    Raises:
        OSError: the file could not be opened
        TypeError: target is none of the above
    """
    if isinstance(target, str):
        name = target.lower()
        if name == "":
            return DiscardSink()
        if name == "stdout":
            return sys.stdout
        if name == "stderr":
            return sys.stderr
        _log.debug("opening log file %s", target)
        return open_log_file(target)
    if isinstance(target, os.PathLike):
        _log.debug("opening log file %s", os.fspath(target))
        return open_log_file(target)
    if isinstance(target, Sink):
        return target

    raise TypeError(f"create_writer() called with unhandled input: {target!r}")


def flush(sink: Any) -> None:
    """Flush a sink if it supports flushing."""
    flusher = getattr(sink, "flush", None)
    if flusher is not None:
        flusher()


def is_terminal(sink: Any) -> bool:
    """Check whether a sink is backed by a terminal.

    Only real files count; in-memory buffers and wrappers without a file
    descriptor are never terminals.
    """
    try:
        return os.isatty(sink.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def terminate(status: int = 1) -> NoReturn:
    """End the process with status; callers flush their sinks first.

    On the main thread this raises SystemExit. Anywhere else SystemExit would
    only end the calling thread, so the process is ended with os._exit.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(status)
    os._exit(status)
