"""Audit log: timestamped lines to a single shared output.

Writers handed out by writer() are registered with the logger that made
them. set_output() moves the logger and every registered writer to the new
output under one lock, so a writer captured before a redirection still
writes wherever the audit log currently goes.
"""

from __future__ import annotations

import threading
import time
from typing import Any

from .log import get_logger
from .sinks import Sink, create_writer, flush

_log = get_logger("audit")

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def _line(msg: str) -> str:
    stamp = time.strftime(TIME_FORMAT, time.gmtime())
    line = f"{stamp} {msg}"
    return line if line.endswith("\n") else line + "\n"


class ExternalWriter:
    """An optionally-prefixed writer for third-party logging packages.

    Shares its lock with the AuditLogger that issued it, so a write either
    completes before a redirection or happens entirely after it.
    """

    def __init__(self, out: Sink, lock: threading.RLock, prefix: str = ""):
        self._out = out
        self._lock = lock
        self._prefix = prefix

    def prefix(self, prefix: str) -> ExternalWriter:
        self._prefix = prefix
        return self

    @property
    def output(self) -> Sink:
        with self._lock:
            return self._out

    def set_output(self, out: Sink) -> None:
        with self._lock:
            self._out = out

    def write(self, data: str | bytes) -> int:
        if isinstance(data, bytes | bytearray | memoryview):
            msg = bytes(data).decode("utf-8", errors="replace")
        else:
            msg = data
        with self._lock:
            self._out.write(_line(self._prefix + msg))
            flush(self._out)
        return len(data)

    def flush(self) -> None:
        pass

    def writable(self) -> bool:
        return True


class AuditLogger:
    """Writes UTC-timestamped audit lines to one output."""

    def __init__(self, out: Any = "stdout"):
        self._lock = threading.RLock()
        self._out: Sink = create_writer(out)
        self._externals: list[ExternalWriter] = []

    @property
    def output(self) -> Sink:
        with self._lock:
            return self._out

    @property
    def externals(self) -> tuple[ExternalWriter, ...]:
        with self._lock:
            return tuple(self._externals)

    def set_output(self, target: Any) -> None:
        """Redirect this logger and every writer it has handed out."""
        out = create_writer(target)
        with self._lock:
            self._out = out
            for writer in self._externals:
                writer.set_output(out)
            _log.debug("redirected audit output and %d writers", len(self._externals))

    def writer(self, prefix: str = "") -> ExternalWriter:
        """Return a registered writer suitable for injection into third-party
        logging packages."""
        with self._lock:
            writer = ExternalWriter(self._out, self._lock, prefix)
            self._externals.append(writer)
            return writer

    def output_line(self, msg: str) -> None:
        with self._lock:
            self._out.write(_line(msg))
            flush(self._out)

    def log(self, *args: Any) -> None:
        """Output a log message from the arguments."""
        self.output_line(" ".join(str(a) for a in args))

    def logf(self, fmt: str, *args: Any) -> None:
        """Output a formatted log message from the arguments."""
        self.output_line(fmt % args)


_std: AuditLogger | None = None
_std_lock = threading.Lock()


def standard_logger() -> AuditLogger:
    """Return the process-wide audit logger (stdout), creating it on first use."""
    global _std

    with _std_lock:
        if _std is None:
            _std = AuditLogger()
        return _std


def new_logger(out: Any) -> AuditLogger:
    return AuditLogger(out)


def writer(prefix: str = "") -> ExternalWriter:
    """Return a registered writer on the process-wide audit logger."""
    return standard_logger().writer(prefix)


def set_output(target: Any) -> None:
    """Redirect the process-wide audit logger and all its writers."""
    standard_logger().set_output(target)


def log(*args: Any) -> None:
    standard_logger().log(*args)


def logf(fmt: str, *args: Any) -> None:
    standard_logger().logf(fmt, *args)
