from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta

from .patterns import compile_matchers, time_span
from .types import DEFAULT_DATE_FORMAT, MONTH_NAMES, WEEKDAY_NAMES, DateFormat, ParsedDate

logger = logging.getLogger(__name__)


def _month_token_to_int(tok: str) -> int | None:
    if tok not in MONTH_NAMES:
        return None
    return MONTH_NAMES.index(tok) + 1


def match_to_date(m: re.Match[str]) -> ParsedDate | None:
    """Build a ParsedDate from a match of a compiled date pattern.

    The weekday group is not checked against the resulting date. Out-of-range days,
    hours and minutes roll over the way calendar arithmetic does (Feb 30 -> Mar 2).
    """

    groups = m.groupdict()
    month = _month_token_to_int(groups.get("month") or "")
    if not month:
        logger.debug("Unrecognized month in %r", m.group(0))
        return None
    if not groups.get("year") or not groups.get("day"):
        logger.debug("Incomplete date in %r", m.group(0))
        return None

    year = int(groups["year"])
    day = int(groups["day"])
    hour = int(groups["hour"]) if groups.get("hour") else 0
    minute = int(groups["minute"]) if groups.get("minute") else 0

    try:
        dt = datetime(year, month, 1) + timedelta(days=day - 1, hours=hour, minutes=minute)
    except (ValueError, OverflowError) as e:
        logger.debug("Unrepresentable date %r: %s", m.group(0), e)
        return None
    return ParsedDate.from_datetime(dt)


def parse_date(text: str, fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> ParsedDate | None:
    """Parse the first date in ``text`` written in ``fmt``; None when there is none."""

    m = compile_matchers(fmt).plain.search(text)
    if not m:
        logger.debug("No date in %r", text)
        return None
    return match_to_date(m)


def render_date(d: ParsedDate, fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> str:
    """Write ``d`` in ``fmt``; the inverse of parse_date.

    The time part is left out when ``d`` has no time (00:00).
    """

    df = compile_matchers(fmt).format
    dt = d.to_datetime()
    values = {
        "weekday": WEEKDAY_NAMES[dt.weekday()],
        "month": MONTH_NAMES[dt.month - 1],
        "day": f"{dt.day:02d}",
        "year": f"{dt.year:04d}",
        "hour": f"{dt.hour:02d}",
        "minute": f"{dt.minute:02d}",
    }

    skip: range = range(0)
    span = time_span(df)
    if span and not d.has_time:
        skip = range(span[0], span[1] + 1)

    out = []
    for i, tok in enumerate(df.tokens):
        if i in skip:
            continue
        out.append(tok.text if tok.kind == "literal" else values[tok.kind])
    return "".join(out)
