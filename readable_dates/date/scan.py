from __future__ import annotations

import logging
from datetime import datetime

from .relative import humanize
from .types import DEFAULT_DATE_FORMAT, DateFormat, Matchers, Occurrence, ReplacementDirective

logger = logging.getLogger(__name__)


def _overlaps(a: tuple[int, int], b: tuple[int, int]) -> bool:
    # Half-open spans: containment, partial overlap and equality all count.
    return a[0] < b[1] and b[0] < a[1]


def scan(text: str, matchers: Matchers, *, offset: int = 0) -> list[Occurrence]:
    """Find every date in ``text``, ordered by start offset.

    Bracketed dates are found first; a plain date touching any bracketed span is
    dropped so occurrences never overlap. ``offset`` is added to every position, for
    callers scanning a slice of a larger document.
    """

    out: list[Occurrence] = []
    taken: list[tuple[int, int]] = []

    for m in matchers.bracketed.finditer(text):
        taken.append(m.span())
        out.append(
            Occurrence(
                start=offset + m.start(),
                end=offset + m.end(),
                text=m.group(0),
                date_text=m.group("date"),
                bracketed=True,
            )
        )

    for m in matchers.plain.finditer(text):
        if any(_overlaps(m.span(), span) for span in taken):
            continue
        out.append(
            Occurrence(
                start=offset + m.start(),
                end=offset + m.end(),
                text=m.group(0),
                date_text=m.group(0),
            )
        )

    out.sort(key=lambda o: o.start)
    logger.debug("Found %d date occurrence(s) (%d bracketed)", len(out), len(taken))
    return out


def reconcile(
    occurrences: list[Occurrence],
    cursor: int | None,
    *,
    now: datetime,
    fmt: str | DateFormat = DEFAULT_DATE_FORMAT,
) -> list[ReplacementDirective]:
    """Turn occurrences into replacement directives.

    An occurrence is left alone when the cursor sits inside it (ends inclusive) or
    when its date cannot be described.
    """

    out: list[ReplacementDirective] = []
    for occ in sorted(occurrences, key=lambda o: o.start):
        phrase = humanize(occ.date_text, now, fmt)
        if phrase is None:
            continue
        if cursor is not None and occ.start <= cursor <= occ.end:
            continue
        out.append(
            ReplacementDirective(
                start=occ.start,
                end=occ.end,
                display_text=phrase,
                original_text=occ.text,
                bracketed=occ.bracketed,
            )
        )
    return out
