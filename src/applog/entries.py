"""Log entry arguments.

Call sites pass loosely shaped arguments (an exception, a lone string, or a
format string plus values). They are turned into one of three explicit entry
kinds before anything is recorded:

- ErrorValue: an exception, rendered "ERROR: <error>"
- Formatted: a %-style format string plus its arguments
- PlainText: a single string, emitted verbatim (a lone string is never
  treated as a format string, so stray % characters in user data are safe)

Callers may also construct the entries directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class UnhandledEntryError(TypeError):
    """A log call was made with arguments that cannot be rendered.

    This signals a programming error at the call site and is not meant to be
    caught.
    """


@dataclass(frozen=True)
class ErrorValue:
    error: BaseException

    def render(self) -> str:
        return f"ERROR: {self.error}"


@dataclass(frozen=True)
class Formatted:
    fmt: str
    args: tuple[Any, ...] = ()

    def render(self) -> str:
        return self.fmt % self.args


@dataclass(frozen=True)
class PlainText:
    text: str

    def render(self) -> str:
        return self.text


Entry = ErrorValue | Formatted | PlainText


def to_entry(args: tuple[Any, ...]) -> Entry | None:
    """Build an entry from call-site arguments.

    Returns None for an empty argument tuple; callers treat that as a no-op.
    """
    if not args:
        return None

    first, rest = args[0], args[1:]
    if isinstance(first, ErrorValue | Formatted | PlainText):
        return first
    if isinstance(first, BaseException):
        return ErrorValue(first)
    if isinstance(first, str):
        if rest:
            return Formatted(first, tuple(rest))
        return PlainText(first)

    raise UnhandledEntryError(f"Unhandled entry: {args!r}")
