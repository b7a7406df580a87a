"""applog - leveled application logging with a journal, a display, and tasks.

The functions here forward to the process-wide AppLogger, which is created
on first use (see standard_logger / set_standard).
"""

from typing import Any

from . import alert, audit
from .entries import ErrorValue, Formatted, PlainText, UnhandledEntryError
from .levels import Level, describe
from .logger import AppLogger, set_standard, standard_logger
from .sinks import DiscardSink, create_writer
from .writer import LoggedWriter

DEBUG = Level.DEBUG
USER = Level.USER
INFO = Level.INFO
WARN = Level.WARN
FAIL = Level.FAIL
SILENT = Level.SILENT

__all__ = [
    # Types
    "AppLogger",
    "LoggedWriter",
    "Level",
    "ErrorValue",
    "Formatted",
    "PlainText",
    "UnhandledEntryError",
    "DiscardSink",
    # Levels
    "DEBUG",
    "USER",
    "INFO",
    "WARN",
    "FAIL",
    "SILENT",
    "describe",
    # Process-wide logger
    "standard_logger",
    "set_standard",
    "set_level",
    "set_journal",
    "set_display",
    "debug",
    "user",
    "info",
    "warn",
    "fail",
    "start_task",
    "complete_task",
    "writer",
    "out",
    "err",
    # Output plumbing
    "create_writer",
    "set_writer",
]


def set_level(level: Level) -> None:
    """Set the process-wide logger's display level."""
    standard_logger().set_level(level)


def set_journal(target: Any) -> None:
    """Set the process-wide logger's journal (a sink, "", "stdout", "stderr" or a path)."""
    standard_logger().set_journal(target)


def set_display(target: Any) -> None:
    standard_logger().set_display(target)


def debug(*args: Any) -> None:
    standard_logger().debug(*args)


def user(*args: Any) -> None:
    standard_logger().user(*args)


info = user


def warn(*args: Any) -> None:
    standard_logger().warn(*args)


def fail(*args: Any) -> None:
    standard_logger().fail(*args)


def start_task(*args: Any) -> None:
    standard_logger().start_task(*args)


def complete_task(*args: Any) -> None:
    standard_logger().complete_task(*args)


def writer(prefix: str = "", level: Level = Level.DEBUG) -> LoggedWriter:
    """Return a writer for injecting 3rd-party output into the process-wide logger."""
    return standard_logger().writer(prefix, level)


def out() -> LoggedWriter:
    return standard_logger().out()


def err() -> LoggedWriter:
    return standard_logger().err()


def set_writer(target: Any) -> None:
    """Point the alert and audit logs (and every audit writer) at one output."""
    sink = create_writer(target)
    alert.set_output(sink)
    audit.set_output(sink)
