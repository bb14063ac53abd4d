"""Relative phrases for parsed dates ("Yesterday", "In 3 days", "5 mins ago").

The phrase depends only on the date and an explicit ``now``; nothing here reads the
clock. Precision is tiered: minutes/hours for timed dates within a day of ``now``,
otherwise days, weeks, months (30 days) and years (365 days).
"""

from __future__ import annotations

import math
from datetime import datetime

from .parsers import parse_date
from .types import DEFAULT_DATE_FORMAT, DateFormat, ParsedDate

MINUTE_S = 60.0
HOUR_S = 3600.0

NOW_WINDOW_MINUTES = 5


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _count(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def _directed(n: int, unit: str, past: bool) -> str:
    return f"{_count(n, unit)} ago" if past else f"In {_count(n, unit)}"


def _time_phrase(diff_s: float) -> str:
    abs_minutes = abs(diff_s) / MINUTE_S
    if abs_minutes < NOW_WINDOW_MINUTES:
        return "Now"
    if abs_minutes < 60:
        return _directed(_round_half_away(abs_minutes), "min", diff_s < 0)
    return _directed(_round_half_away(abs(diff_s) / HOUR_S), "hour", diff_s < 0)


def _day_phrase(diff_days: int) -> str:
    d = abs(diff_days)
    past = diff_days < 0

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Tomorrow"
    if diff_days == -1:
        return "Yesterday"
    if d <= 7:
        return _directed(d, "day", past)
    if d <= 14:
        return "Last week" if past else "Next week"
    if d <= 30:
        return _directed(math.ceil(d / 7), "week", past)
    if d <= 365:
        months = math.ceil(d / 30)
        if months == 1:
            return "Last month" if past else "Next month"
        return _directed(months, "month", past)

    years = math.ceil(d / 365)
    if years == 1:
        return "Last year" if past else "Next year"
    return _directed(years, "year", past)


def format_relative(parsed: ParsedDate | None, now: datetime) -> str | None:
    """Return the relative phrase for ``parsed`` as seen at ``now``.

    Timed dates less than 24 hours away get minute/hour precision. Everything else is
    bucketed by calendar days (midnight to midnight), so 23:00 yesterday is still
    "Yesterday" at 01:00 today.
    """

    if parsed is None:
        return None

    when = parsed.to_datetime()
    diff_s = (when - now).total_seconds()

    if parsed.has_time and abs(diff_s) / HOUR_S < 24:
        return _time_phrase(diff_s)

    day_delta = when.date() - now.date()
    diff_days = _round_half_away(day_delta.total_seconds() / 86400)
    return _day_phrase(diff_days)


def humanize(text: str, now: datetime, fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> str | None:
    """Parse ``text`` and describe it relative to ``now``."""

    return format_relative(parse_date(text, fmt), now)
