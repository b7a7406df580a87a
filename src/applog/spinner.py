"""Task indicators: the spinner shown while a long-running task is active."""

from __future__ import annotations

from typing import Any, Protocol

from rich.console import Console
from rich.status import Status
from rich.text import Text

from .sinks import is_terminal


class TaskIndicator(Protocol):
    """Something that can show (and stop showing) an in-progress task."""

    def restart(self, prefix: str) -> None:
        """Start (or restart) the indicator with the given leading text."""
        ...

    def stop(self) -> None:
        """Stop the indicator. Safe to call when it isn't running."""
        ...


class RichSpinner:
    """A rich spinner drawn on the display sink.

    The spinner only animates when the sink is a terminal; anywhere else
    (pipes, files, buffers) it is silently skipped so no control codes end
    up in captured output.
    """

    def __init__(self, sink: Any, spinner: str = "dots", speed: float = 1.0):
        self._console = Console(file=sink, highlight=False)
        self._spinner = spinner
        self._speed = speed
        self._status: Status | None = None
        self._enabled = is_terminal(sink)

    @property
    def running(self) -> bool:
        return self._status is not None

    def restart(self, prefix: str) -> None:
        self.stop()
        if not self._enabled:
            return
        self._status = Status(
            Text(prefix),  # plain text: task names are not rich markup
            console=self._console,
            spinner=self._spinner,
            speed=self._speed,
        )
        self._status.start()

    def stop(self) -> None:
        if self._status is None:
            return
        self._status.stop()
        self._status = None


def rich_spinner(sink: Any) -> TaskIndicator:
    """Default indicator factory: a RichSpinner bound to the display sink."""
    return RichSpinner(sink)
