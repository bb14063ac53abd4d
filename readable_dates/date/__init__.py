"""Date recognition and relative phrasing.

Pipeline: compile a matcher from the configured format, scan text for occurrences,
parse each one back to a calendar point, and describe it relative to an explicit "now".
Everything here is pure; the caller decides what "now" is.
"""

from .types import (
    DEFAULT_DATE_FORMAT,
    DateFormat,
    FormatSpecError,
    Matchers,
    Occurrence,
    ParsedDate,
    ReplacementDirective,
)
from .patterns import compile_bracketed_pattern, compile_matchers, compile_pattern, parse_format
from .parsers import parse_date, render_date
from .relative import format_relative, humanize
from .scan import reconcile, scan
