"""Editor-facing glue: which replacement overlays apply to a piece of text.

A host editor calls ``OverlayBuilder.update`` on every document, viewport or selection
change and draws each returned directive as a widget over the hidden original text.
``render_text`` produces the same view as plain text.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .config import Settings
from .date.patterns import compile_matchers
from .date.scan import reconcile, scan
from .date.types import DEFAULT_DATE_FORMAT, FormatSpecError, ReplacementDirective

logger = logging.getLogger(__name__)

# Bracketed dates look like links, plain ones like accented text.
LINK_STYLE = {"color": "var(--link-color)", "text-decoration": "underline"}
ACCENT_STYLE = {"color": "var(--text-accent)", "font-style": "italic"}


def directive_style(d: ReplacementDirective) -> dict[str, str]:
    base = LINK_STYLE if d.bracketed else ACCENT_STYLE
    return {**base, "cursor": "text"}


class OverlayBuilder:
    """Recomputes the full directive list from scratch on each build."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.directives: list[ReplacementDirective] = []

    def build(
        self,
        text: str,
        cursor: int | None = None,
        *,
        now: datetime | None = None,
        visible: tuple[int, int] | None = None,
    ) -> list[ReplacementDirective]:
        """Scan ``text`` (or its ``visible`` slice) and reconcile against ``cursor``.

        ``now`` is sampled once here so every phrase in one build agrees.
        """

        if now is None:
            now = datetime.now()
        fmt = self.settings.date_format
        try:
            matchers = compile_matchers(fmt)
        except FormatSpecError as e:
            logger.warning("Ignoring date format from settings: %s", e)
            fmt = DEFAULT_DATE_FORMAT
            matchers = compile_matchers(fmt)

        if visible is None:
            occurrences = scan(text, matchers)
        else:
            start, end = visible
            start = max(0, start)
            occurrences = scan(text[start:end], matchers, offset=start)

        self.directives = reconcile(occurrences, cursor, now=now, fmt=fmt)
        logger.debug("Built %d overlay(s) from %d occurrence(s)", len(self.directives), len(occurrences))
        return self.directives

    def update(
        self,
        text: str,
        cursor: int | None = None,
        *,
        doc_changed: bool = False,
        viewport_changed: bool = False,
        selection_set: bool = False,
        now: datetime | None = None,
        visible: tuple[int, int] | None = None,
    ) -> list[ReplacementDirective]:
        if doc_changed or viewport_changed or selection_set:
            return self.build(text, cursor, now=now, visible=visible)
        return self.directives


def render_text(text: str, directives: list[ReplacementDirective], *, show_original: bool = False) -> str:
    """Apply directives to ``text``. Directives must not overlap."""

    out: list[str] = []
    pos = 0
    for d in sorted(directives, key=lambda x: x.start):
        out.append(text[pos : d.start])
        out.append(f"{d.display_text} ({d.tooltip})" if show_original else d.display_text)
        pos = d.end
    out.append(text[pos:])
    return "".join(out)
