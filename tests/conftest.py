"""Shared test helpers."""

import io

import pytest

from applog import AppLogger, Level


class FakeIndicator:
    """Records restart/stop calls instead of drawing a spinner."""

    def __init__(self, sink=None):
        self.sink = sink
        self.calls: list[tuple[str, str | None]] = []
        self.running = False

    def restart(self, prefix: str) -> None:
        self.calls.append(("restart", prefix))
        self.running = True

    def stop(self) -> None:
        self.calls.append(("stop", None))
        self.running = False


def journal_entries(buf: io.StringIO) -> list[str]:
    """Journal lines with the leading "YYYY/MM/DD HH:MM:SS " stamp removed."""
    return [line.split(" ", 2)[2] for line in buf.getvalue().splitlines()]


class Sinks:
    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.journal = io.StringIO()
        self.indicators: list[FakeIndicator] = []

    def indicator(self, sink) -> FakeIndicator:
        ind = FakeIndicator(sink)
        self.indicators.append(ind)
        return ind

    @property
    def spinner(self) -> FakeIndicator:
        return self.indicators[-1]

    def logger(self, level: Level = Level.USER) -> AppLogger:
        return AppLogger(
            level=level,
            display=self.out,
            alternate_display=self.err,
            journal=self.journal,
            indicator_factory=self.indicator,
        )


@pytest.fixture
def sinks() -> Sinks:
    return Sinks()
