"""Switchable debug tracing.

A Debugger writes nothing until it is enabled. Lines look like:

    DEBUG 14:02:11.402913 worker.py:88: queue drained

The module-level functions use a default debugger writing to stdout;
add_debug_flag() wires it to a --debug command line switch.
"""

from __future__ import annotations

import argparse
import os
import sys
import threading
from datetime import datetime
from typing import Any

from .sinks import Sink, create_writer, flush

PREFIX = "DEBUG "


class Debugger:
    def __init__(self, out: Any = "stdout", enabled: bool = False):
        self._lock = threading.Lock()
        self._out: Sink = create_writer(out)
        self._enabled = enabled

    def set_output(self, target: Any) -> None:
        out = create_writer(target)
        with self._lock:
            self._out = out

    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def output(self, skip: int, msg: str) -> None:
        """Write one trace line if enabled; skip counts frames up to the caller."""
        frame = sys._getframe(skip)
        origin = f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
        stamp = datetime.now().strftime("%H:%M:%S.%f")
        line = f"{PREFIX}{stamp} {origin}: {msg}"
        if not line.endswith("\n"):
            line += "\n"
        with self._lock:
            if not self._enabled:
                return
            self._out.write(line)
            flush(self._out)

    def log(self, *args: Any) -> None:
        self.output(2, " ".join(str(a) for a in args))

    def logf(self, fmt: str, *args: Any) -> None:
        self.output(2, fmt % args)

    def assert_(self, expr: bool, *args: Any) -> None:
        """Trace and raise AssertionError if expr is false. No-op while disabled."""
        if not self.enabled() or expr:
            return
        msg = "ASSERTION FAILED: " + " ".join(str(a) for a in args)
        self.output(2, msg)
        raise AssertionError(msg)

    def assertf(self, expr: bool, fmt: str, *args: Any) -> None:
        if not self.enabled() or expr:
            return
        msg = "ASSERTION FAILED: " + (fmt % args)
        self.output(2, msg)
        raise AssertionError(msg)


_std: Debugger | None = None
_std_lock = threading.Lock()


def standard_debugger() -> Debugger:
    """Return the process-wide debugger (stdout, disabled), creating it on first use."""
    global _std

    with _std_lock:
        if _std is None:
            _std = Debugger()
        return _std


class _EnableDebug(argparse.Action):
    def __init__(self, option_strings, dest, debugger: Debugger | None = None, **kwargs):
        self._debugger = debugger
        super().__init__(option_strings, dest, nargs=0, default=False, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, True)
        (self._debugger or standard_debugger()).enable()


def add_debug_flag(parser: argparse.ArgumentParser, debugger: Debugger | None = None) -> None:
    """Register --debug on parser; passing it enables the debugger."""
    parser.add_argument(
        "--debug",
        action=_EnableDebug,
        debugger=debugger,
        help="enable debug output",
    )


def set_output(target: Any) -> None:
    standard_debugger().set_output(target)


def enable() -> None:
    standard_debugger().enable()


def disable() -> None:
    standard_debugger().disable()


def enabled() -> bool:
    return standard_debugger().enabled()


def log(*args: Any) -> None:
    """Trace the arguments if debugging is enabled."""
    standard_debugger().output(2, " ".join(str(a) for a in args))


def logf(fmt: str, *args: Any) -> None:
    """Trace a formatted message if debugging is enabled."""
    standard_debugger().output(2, fmt % args)


def assert_(expr: bool, *args: Any) -> None:
    """Raise AssertionError if expr is false, but only if debugging is enabled."""
    dbg = standard_debugger()
    if not dbg.enabled() or expr:
        return
    msg = "ASSERTION FAILED: " + " ".join(str(a) for a in args)
    dbg.output(2, msg)
    raise AssertionError(msg)


def assertf(expr: bool, fmt: str, *args: Any) -> None:
    dbg = standard_debugger()
    if not dbg.enabled() or expr:
        return
    msg = "ASSERTION FAILED: " + (fmt % args)
    dbg.output(2, msg)
    raise AssertionError(msg)
