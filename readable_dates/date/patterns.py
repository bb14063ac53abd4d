from __future__ import annotations

import re
from functools import lru_cache

from .types import (
    DEFAULT_DATE_FORMAT,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    DateFormat,
    FormatSpecError,
    FormatToken,
    Matchers,
    TokenKind,
)

# Longest tokens first so "YYYY" is never read as two "YY".
FORMAT_TOKENS: tuple[tuple[str, TokenKind], ...] = (
    ("YYYY", "year"),
    ("ddd", "weekday"),
    ("MMM", "month"),
    ("DD", "day"),
    ("HH", "hour"),
    ("mm", "minute"),
)

TOKEN_PATTERNS: dict[str, str] = {
    "weekday": rf"(?P<weekday>{'|'.join(WEEKDAY_NAMES)})",
    "month": rf"(?P<month>{'|'.join(MONTH_NAMES)})",
    "day": r"(?P<day>\d{1,2})",
    "year": r"(?P<year>\d{4})",
    "hour": r"(?P<hour>\d{1,2})",
    "minute": r"(?P<minute>\d{2})",
}

TIME_KINDS = ("hour", "minute")


def parse_format(fmt: str) -> DateFormat:
    """Split a format string into typed tokens.

    Anything that is not one of ``ddd MMM DD YYYY HH mm`` is kept as literal text.
    """

    tokens: list[FormatToken] = []
    literal = ""
    i = 0
    while i < len(fmt):
        for text, kind in FORMAT_TOKENS:
            if fmt.startswith(text, i):
                if literal:
                    tokens.append(FormatToken("literal", literal))
                    literal = ""
                tokens.append(FormatToken(kind, text))
                i += len(text)
                break
        else:
            literal += fmt[i]
            i += 1
    if literal:
        tokens.append(FormatToken("literal", literal))

    kinds = [t.kind for t in tokens if t.kind != "literal"]
    for kind in set(kinds):
        if kinds.count(kind) > 1:
            raise FormatSpecError(f"Date format repeats the {kind} token: {fmt!r}")
    missing = [k for k in ("month", "day", "year") if k not in kinds]
    if missing:
        raise FormatSpecError(f"Date format needs MMM, DD and YYYY (missing {', '.join(missing)}): {fmt!r}")
    if ("hour" in kinds) != ("minute" in kinds):
        raise FormatSpecError(f"Date format must have both HH and mm, or neither: {fmt!r}")

    # The time is one optional group, so only separators may sit between HH and mm.
    time_idx = [i for i, t in enumerate(tokens) if t.kind in TIME_KINDS]
    if time_idx and any(t.kind != "literal" for t in tokens[time_idx[0] + 1 : time_idx[-1]]):
        raise FormatSpecError(f"Date format must keep HH and mm together: {fmt!r}")

    return DateFormat(source=fmt, tokens=tuple(tokens))


def _literal_pattern(text: str) -> str:
    # Any run of whitespace in the format matches any run of whitespace in the text.
    parts = re.split(r"(\s+)", text)
    return "".join(r"\s+" if p.isspace() else re.escape(p) for p in parts if p)


def _token_pattern(tok: FormatToken) -> str:
    if tok.kind == "literal":
        return _literal_pattern(tok.text)
    return TOKEN_PATTERNS[tok.kind]


def time_span(df: DateFormat) -> tuple[int, int] | None:
    """Inclusive token index range of the optional time part, or None.

    The range covers the time tokens plus the separator joining them to the date: the
    literal before the time, or the literal after it when the time leads the format.
    """

    if not df.has_time:
        return None
    tokens = df.tokens
    time_idx = [i for i, t in enumerate(tokens) if t.kind in TIME_KINDS]

    lo, hi = time_idx[0], time_idx[-1]
    if lo > 0 and tokens[lo - 1].kind == "literal":
        lo -= 1
    elif hi + 1 < len(tokens) and tokens[hi + 1].kind == "literal":
        hi += 1
    return lo, hi


def _grammar(df: DateFormat) -> str:
    """Regex source for one date (no anchors, no guards)."""

    tokens = df.tokens
    span = time_span(df)
    if span is None:
        return "".join(_token_pattern(t) for t in tokens)

    lo, hi = span
    head = "".join(_token_pattern(t) for t in tokens[:lo])
    optional = "".join(_token_pattern(t) for t in tokens[lo : hi + 1])
    tail = "".join(_token_pattern(t) for t in tokens[hi + 1 :])
    return f"{head}(?:{optional})?{tail}"


def _coerce(fmt: str | DateFormat) -> DateFormat:
    return fmt if isinstance(fmt, DateFormat) else parse_format(fmt)


def compile_pattern(fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> re.Pattern[str]:
    """Matcher for plain date occurrences.

    Digit fields have exact lengths and may not touch further digits, so "20255" is
    never read as the year 2025.
    """

    return re.compile(rf"(?<!\d){_grammar(_coerce(fmt))}(?!\d)")


def compile_bracketed_pattern(fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> re.Pattern[str]:
    """Matcher for ``[[date]]``; the inner date is group ``date``."""

    return re.compile(rf"\[\[(?P<date>{_grammar(_coerce(fmt))})\]\]")


@lru_cache(maxsize=32)
def compile_matchers(fmt: str | DateFormat = DEFAULT_DATE_FORMAT) -> Matchers:
    df = _coerce(fmt)
    return Matchers(format=df, plain=compile_pattern(df), bracketed=compile_bracketed_pattern(df))
