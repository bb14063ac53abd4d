#!/usr/bin/env python3
"""Show a text file the way the editor overlay would: dates as relative phrases.

Usage:
  PYTHONPATH=. python3 scripts/preview_dates.py notes.md
  PYTHONPATH=. python3 scripts/preview_dates.py notes.md --now "2025-08-29 14:50" --cursor 120
  PYTHONPATH=. python3 scripts/preview_dates.py notes.md --json
  PYTHONPATH=. python3 scripts/preview_dates.py notes.md --format "DD MMM YYYY" --settings settings.json --save

Options:
  --settings PATH   JSON settings file ({"dateFormat": ...}); READABLE_DATES_FORMAT
                    (env or .env) overrides it.
  --format FMT      Use this format for this run instead of the configured one.
  --save            Write the effective format back to --settings.
  --cursor N        Character offset of the cursor; the date under it stays as written.
  --json            Print the replacement directives instead of the rendered text.
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

from readable_dates.config import load_settings, save_settings
from readable_dates.date.patterns import parse_format
from readable_dates.date.types import FormatSpecError
from readable_dates.overlay import OverlayBuilder, directive_style, render_text


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("file")
    ap.add_argument("--settings", default=None)
    ap.add_argument("--format", dest="fmt", default=None)
    ap.add_argument("--save", action="store_true")
    ap.add_argument("--cursor", type=int, default=None)
    ap.add_argument("--now", default=None, help="Reference time, e.g. '2025-08-29 14:50' (default: current time)")
    ap.add_argument("--json", action="store_true")
    ap.add_argument("--show-original", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    inp = Path(args.file)
    if not inp.exists():
        raise SystemExit(f"Missing: {inp}")

    settings_path = Path(args.settings) if args.settings else None
    settings = load_settings(settings_path)
    if args.fmt:
        try:
            parse_format(args.fmt)
        except FormatSpecError as e:
            raise SystemExit(str(e))
        settings.date_format = args.fmt

    if args.save:
        if not settings_path:
            raise SystemExit("--save needs --settings")
        save_settings(settings, settings_path)

    now = datetime.fromisoformat(args.now) if args.now else None
    text = inp.read_text(encoding="utf-8", errors="replace")

    directives = OverlayBuilder(settings).build(text, args.cursor, now=now)

    if args.json:
        items = [
            {
                "from": d.start,
                "to": d.end,
                "displayText": d.display_text,
                "originalText": d.original_text,
                "isBracketed": d.bracketed,
                "title": d.tooltip,
                "style": directive_style(d),
            }
            for d in directives
        ]
        print(json.dumps(items, ensure_ascii=False, indent=2))
        return

    print(render_text(text, directives, show_original=args.show_original), end="")


if __name__ == "__main__":
    main()
