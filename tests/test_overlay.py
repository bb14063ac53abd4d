from __future__ import annotations

import logging
from datetime import datetime

import pytest

from readable_dates.config import Settings
from readable_dates.overlay import OverlayBuilder, directive_style, render_text

NOW = datetime(2025, 8, 29, 14, 50)
TEXT = "Due Thu Aug 28 2025, review [[Sun Aug 31 2025]]."


def test_build_and_render() -> None:
    directives = OverlayBuilder().build(TEXT, now=NOW)
    assert render_text(TEXT, directives) == "Due Yesterday, review In 2 days."


def test_cursor_reveals_original() -> None:
    directives = OverlayBuilder().build(TEXT, 6, now=NOW)
    assert render_text(TEXT, directives) == "Due Thu Aug 28 2025, review In 2 days."


def test_show_original() -> None:
    directives = OverlayBuilder().build("Thu Aug 28 2025", now=NOW)
    out = render_text("Thu Aug 28 2025", directives, show_original=True)
    assert out == "Yesterday (Original: Thu Aug 28 2025)"


def test_visible_range_keeps_document_offsets() -> None:
    start = TEXT.index("[[")
    directives = OverlayBuilder().build(TEXT, now=NOW, visible=(start, len(TEXT)))

    assert len(directives) == 1
    assert directives[0].start == start
    assert TEXT[directives[0].start : directives[0].end] == "[[Sun Aug 31 2025]]"


def test_update_only_rebuilds_on_events() -> None:
    builder = OverlayBuilder()
    first = builder.update(TEXT, doc_changed=True, now=NOW)
    assert len(first) == 2

    # nothing happened: same list back, even though the text differs
    assert builder.update("", now=NOW) is first

    assert builder.update("", selection_set=True, now=NOW) == []


def test_settings_format_is_used() -> None:
    builder = OverlayBuilder(Settings(date_format="DD MMM YYYY"))
    directives = builder.build("from 28 Aug 2025 to Sun Aug 31 2025", now=NOW)
    assert [d.display_text for d in directives] == ["Yesterday"]


def test_directive_style() -> None:
    plain, bracketed = OverlayBuilder().build(TEXT, now=NOW)
    assert directive_style(bracketed)["text-decoration"] == "underline"
    assert directive_style(plain)["font-style"] == "italic"
    assert directive_style(plain)["cursor"] == "text"


def test_unusable_format_falls_back_to_default(caplog: pytest.LogCaptureFixture) -> None:
    # half-typed format, as a settings field holds it mid-edit
    builder = OverlayBuilder(Settings(date_format="DD M"))
    with caplog.at_level(logging.WARNING, logger="readable_dates.overlay"):
        directives = builder.build("Thu Aug 28 2025", now=NOW)

    assert [d.display_text for d in directives] == ["Yesterday"]
    assert "Ignoring date format" in caplog.text


def test_split_time_format_never_raises() -> None:
    builder = OverlayBuilder(Settings(date_format="DD MMM HH YYYY mm"))
    assert builder.build("due 29 Aug soon", now=NOW) == []
