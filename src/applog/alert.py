"""Alert log: warnings and fatal errors on stderr.

Alerts usually only show up when something has gone wrong, so each line
carries as much origin information as possible: UTC date and time plus the
full path and line of the caller.
"""

from __future__ import annotations

import sys
import threading
import time
import traceback
from typing import Any, NoReturn

from .sinks import Sink, create_writer, flush, terminate

PREFIX = "ALERT "

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


class AlertLogger:
    """Writes "ALERT" lines to stderr (or wherever set_output points)."""

    def __init__(self, out: Any = "stderr"):
        self._lock = threading.Lock()
        self._out: Sink = create_writer(out)

    def set_output(self, target: Any) -> None:
        out = create_writer(target)
        with self._lock:
            self._out = out

    def output(self, skip: int, msg: str, caller: bool = True) -> None:
        """Write one alert line.

        skip is the number of frames between this call and the code that
        raised the alert; 1 means the direct caller of output().
        """
        stamp = time.strftime(TIME_FORMAT, time.gmtime())
        if caller:
            frame = sys._getframe(skip)
            origin = f"{frame.f_code.co_filename}:{frame.f_lineno}: "
        else:
            origin = ""
        line = f"{PREFIX}{stamp} {origin}{msg}"
        if not line.endswith("\n"):
            line += "\n"
        with self._lock:
            self._out.write(line)
            flush(self._out)

    def warn(self, *args: Any) -> None:
        self.output(2, " ".join(str(a) for a in args))

    def warnf(self, fmt: str, *args: Any) -> None:
        self.output(2, fmt % args)

    def fatal(self, *args: Any) -> NoReturn:
        self.output(2, " ".join(str(a) for a in args))
        terminate(1)

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        self.output(2, fmt % args)
        terminate(1)

    def abort(self, error: BaseException) -> NoReturn:
        """Print the error (with its traceback and causes) and exit."""
        trace = "".join(traceback.format_exception(error))
        # where abort() was called from is noise next to the traceback
        self.output(2, "Aborting program execution due to error(s):\n" + trace, caller=False)
        terminate(1)


_std: AlertLogger | None = None
_std_lock = threading.Lock()


def standard_logger() -> AlertLogger:
    """Return the process-wide alert logger (stderr), creating it on first use."""
    global _std

    with _std_lock:
        if _std is None:
            _std = AlertLogger()
        return _std


def set_output(target: Any) -> None:
    standard_logger().set_output(target)


def warn(*args: Any) -> None:
    standard_logger().output(2, " ".join(str(a) for a in args))


def warnf(fmt: str, *args: Any) -> None:
    standard_logger().output(2, fmt % args)


def fatal(*args: Any) -> NoReturn:
    standard_logger().output(2, " ".join(str(a) for a in args))
    terminate(1)


def fatalf(fmt: str, *args: Any) -> NoReturn:
    standard_logger().output(2, fmt % args)
    terminate(1)


def abort(error: BaseException) -> NoReturn:
    standard_logger().abort(error)
