from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

TokenKind = Literal["weekday", "month", "day", "year", "hour", "minute", "literal"]

DEFAULT_DATE_FORMAT = "ddd MMM DD YYYY HH:mm"

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class FormatSpecError(ValueError):
    """The date format string cannot be turned into a matcher."""


@dataclass(frozen=True)
class FormatToken:
    kind: TokenKind
    text: str


@dataclass(frozen=True)
class DateFormat:
    """A tokenized date format such as ``ddd MMM DD YYYY HH:mm``."""

    source: str
    tokens: tuple[FormatToken, ...]

    @property
    def has_time(self) -> bool:
        return any(t.kind == "hour" for t in self.tokens)


@dataclass(frozen=True)
class Matchers:
    """Compiled recognizers for one format: plain dates and ``[[bracketed]]`` dates."""

    format: DateFormat
    plain: re.Pattern[str]
    bracketed: re.Pattern[str]


@dataclass(frozen=True)
class Occurrence:
    """A date found in a text buffer.

    ``text`` is the full matched literal (brackets included), ``date_text`` is the part
    handed to the parser.
    """

    start: int
    end: int
    text: str
    date_text: str
    bracketed: bool = False


@dataclass(frozen=True)
class ParsedDate:
    """A wall-clock calendar point. ``month`` is 1-based; values are already normalized."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    @property
    def has_time(self) -> bool:
        # A literal 00:00 and "no time given" look the same from here on.
        return self.hour != 0 or self.minute != 0

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "ParsedDate":
        return cls(year=dt.year, month=dt.month, day=dt.day, hour=dt.hour, minute=dt.minute)


@dataclass(frozen=True)
class ReplacementDirective:
    """Hide ``[start, end)`` and show ``display_text`` in its place."""

    start: int
    end: int
    display_text: str
    original_text: str
    bracketed: bool = False

    @property
    def tooltip(self) -> str:
        return f"Original: {self.original_text}"
