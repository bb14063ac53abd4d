"""Show dates in text as relative phrases ("Yesterday", "In 3 days").

The core lives in ``readable_dates.date``; ``overlay`` and ``config`` are the thin
editor-facing layers around it.
"""

from .config import Settings, load_settings, save_settings
from .date import (
    DEFAULT_DATE_FORMAT,
    FormatSpecError,
    Occurrence,
    ParsedDate,
    ReplacementDirective,
    compile_matchers,
    format_relative,
    humanize,
    parse_date,
    reconcile,
    render_date,
    scan,
)
from .overlay import OverlayBuilder, render_text
