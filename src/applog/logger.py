"""Leveled application logger with a journal and a display.

Every entry is recorded to the journal. Entries at or above the display
level are also shown on the display: DEBUG and USER go to the primary
display, WARN and FAIL go to the alternate display (stderr by default) when
one is set. A FAIL entry ends the process once both sinks are flushed.

Long-running work can be wrapped in a task: start_task() records the task
and shows a spinner, complete_task() stops the spinner and shows the final
"<task> ... Done." line.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

from .entries import Entry, PlainText, to_entry
from .levels import Level, describe
from .sinks import Sink, create_writer, flush, terminate
from .spinner import TaskIndicator, rich_spinner
from .writer import LoggedWriter

TASK_SUFFIX = " ... "

JOURNAL_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

IndicatorFactory = Callable[[Any], TaskIndicator]


def _terminated(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"


class AppLogger:
    """A logger with methods for displaying entries to the user after
    recording them to a journal.

    All state lives behind one lock, so sinks and the display level can be
    changed while other threads are logging. Each entry lands entirely in
    the sinks that were current when it was recorded.
    """

    def __init__(
        self,
        *,
        level: Level = Level.USER,
        display: Any = "stdout",
        alternate_display: Any = "stderr",
        journal: Any = "",
        indicator_factory: IndicatorFactory = rich_spinner,
    ):
        self._lock = threading.RLock()
        self._level = level
        self._display: Sink = create_writer(display)
        self._alternate: Sink | None = (
            create_writer(alternate_display) if alternate_display is not None else None
        )
        self._journal: Sink = create_writer(journal)
        self._indicator_factory = indicator_factory
        self._indicator = indicator_factory(self._display)
        self._last_entry = ""
        self._current_task = ""

    # -- configuration -------------------------------------------------

    @property
    def level(self) -> Level:
        with self._lock:
            return self._level

    def set_level(self, level: Level) -> None:
        with self._lock:
            self._level = Level(level)

    @property
    def display(self) -> Sink:
        with self._lock:
            return self._display

    def set_display(self, target: Any) -> None:
        """Replace the primary display. The spinner moves with it."""
        sink = create_writer(target)
        with self._lock:
            self._indicator.stop()
            self._display = sink
            self._indicator = self._indicator_factory(sink)
            if self._current_task and self._level == Level.USER:
                self._indicator.restart(self._current_task + TASK_SUFFIX)

    @property
    def alternate_display(self) -> Sink | None:
        with self._lock:
            return self._alternate

    def set_alternate_display(self, target: Any) -> None:
        """Replace the WARN/FAIL display. None sends them to the primary display."""
        sink = create_writer(target) if target is not None else None
        with self._lock:
            self._alternate = sink

    @property
    def journal(self) -> Sink:
        with self._lock:
            return self._journal

    def set_journal(self, target: Any) -> None:
        sink = create_writer(target)
        with self._lock:
            self._journal = sink

    @property
    def current_task(self) -> str:
        with self._lock:
            return self._current_task

    @property
    def last_entry(self) -> str:
        with self._lock:
            return self._last_entry

    # -- recording (lock held) -----------------------------------------

    def _record(self, level: Level, entry: Entry) -> str:
        self._last_entry = entry.render()
        stamp = time.strftime(JOURNAL_TIME_FORMAT)
        self._journal.write(_terminated(f"{stamp} {describe(level)}: {self._last_entry}"))
        flush(self._journal)
        return self._last_entry

    def _show(self, level: Level, msg: str) -> None:
        if level == Level.SILENT or level < self._level:
            return

        sink = self._display
        if level >= Level.WARN and self._alternate is not None:
            sink = self._alternate

        text = msg if level == Level.USER else f"{describe(level)}: {msg}"
        sink.write(_terminated(text))
        flush(sink)

    def _emit(self, level: Level, entry: Entry) -> None:
        with self._lock:
            if level >= Level.WARN:
                self._indicator.stop()
                self._current_task = ""

            msg = self._record(level, entry)
            self._show(level, msg)

            if level == Level.FAIL:
                flush(self._display)
                if self._alternate is not None:
                    flush(self._alternate)
                terminate(1)

    def _complete(self, args: tuple[Any, ...]) -> None:
        self._indicator.stop()

        task = self._current_task
        if not args:
            entry = PlainText(task + TASK_SUFFIX + "Done.")
        elif isinstance(args[0], str):
            entry = to_entry((task + TASK_SUFFIX + args[0], *args[1:]))
        else:
            entry = to_entry(args)

        msg = self._record(Level.USER, entry)
        # no task, no display: avoids a stray " ... Done." on screen
        if task:
            self._show(Level.USER, msg)
            self._current_task = ""

    # -- public entry points -------------------------------------------

    def log_at(self, level: Level, *args: Any) -> None:
        """Record an entry at the given level. SILENT entries are dropped."""
        if level == Level.SILENT:
            return
        entry = to_entry(args)
        if entry is None:
            return
        if level not in (Level.USER, Level.WARN, Level.FAIL):
            level = Level.DEBUG
        self._emit(Level(level), entry)

    def debug(self, *args: Any) -> None:
        """Record the entry and show it if the display level is DEBUG."""
        self.log_at(Level.DEBUG, *args)

    def user(self, *args: Any) -> None:
        """Record the entry and show it if the display level is USER or lower."""
        self.log_at(Level.USER, *args)

    info = user

    def warn(self, *args: Any) -> None:
        """Record the entry and show it (on stderr) if the display level is WARN or lower.

        Any running task is abandoned.
        """
        self.log_at(Level.WARN, *args)

    def fail(self, *args: Any) -> None:
        """Record the entry, show it if the display level is FAIL or lower, then exit(1)."""
        self.log_at(Level.FAIL, *args)

    def start_task(self, *args: Any) -> None:
        """Record the entry at USER level and show a spinner until the task completes.

        A task that is still running is completed first.
        """
        entry = to_entry(args)
        if entry is None:
            return

        with self._lock:
            if self._current_task:
                self._complete(())

            self._current_task = self._record(Level.USER, entry)
            # a spinner only makes sense at USER: it would fight with DEBUG
            # output, and SILENT/WARN/FAIL mean nothing should be drawn
            if self._level == Level.USER:
                self._indicator.restart(self._current_task + TASK_SUFFIX)

    def complete_task(self, *args: Any) -> None:
        """Stop the spinner and show the task's completion line.

        With no arguments the line is "<task> ... Done."; otherwise the first
        argument is appended to "<task> ... " (and used as the format string
        when more arguments follow).
        """
        with self._lock:
            self._complete(args)

    # -- writers -------------------------------------------------------

    def writer(self, prefix: str = "", level: Level = Level.DEBUG) -> LoggedWriter:
        """Return a file-like writer for injecting third-party output."""
        return LoggedWriter(self, prefix=prefix, level=level)

    def out(self) -> LoggedWriter:
        """A writer for captured stdout: DEBUG level, prefixed ">"."""
        return self.writer(">")

    def err(self) -> LoggedWriter:
        """A writer for captured stderr: DEBUG level, prefixed "!"."""
        return self.writer("!")


_std: AppLogger | None = None
_std_lock = threading.Lock()


def standard_logger() -> AppLogger:
    """Return the process-wide logger, creating it on first use."""
    global _std

    with _std_lock:
        if _std is None:
            _std = AppLogger()
        return _std


def set_standard(logger: AppLogger) -> None:
    """Replace the process-wide logger."""
    global _std

    with _std_lock:
        _std = logger
