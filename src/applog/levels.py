"""Display levels.

Levels are totally ordered: DEBUG < USER < WARN < FAIL < SILENT. SILENT is
only ever used as a display threshold; nothing is emitted at it.
"""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Display level of a log entry, or the minimum level a logger shows."""

    DEBUG = 0
    USER = 1
    WARN = 2
    FAIL = 3
    SILENT = 4

    # aliases
    INFO = 1

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, name: str) -> Level:
        """Look up a level by (case-insensitive) name, e.g. "warn" or "info"."""
        if not isinstance(name, str):
            raise ValueError(f"Level name must be a string, not {name!r}")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown level: {name!r}") from None


def describe(level: int) -> str:
    """Return the display name for a level.

    Values outside the enumeration format as "Unknown level: <n>" rather
    than failing, so a bad value never breaks a log call.
    """
    try:
        return Level(level).name
    except ValueError:
        return f"Unknown level: {level}"
