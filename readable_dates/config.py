from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .date.patterns import parse_format
from .date.types import DEFAULT_DATE_FORMAT, FormatSpecError

logger = logging.getLogger(__name__)

FORMAT_ENV_VAR = "READABLE_DATES_FORMAT"


@dataclass
class Settings:
    """User settings. Stored as JSON with the key ``dateFormat``."""

    date_format: str = DEFAULT_DATE_FORMAT

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        s = cls()
        fmt = data.get("dateFormat")
        if isinstance(fmt, str) and fmt.strip():
            s.date_format = fmt
        return s

    def to_dict(self) -> dict:
        return {"dateFormat": self.date_format}


def _valid_or_default(fmt: str, origin: str) -> str:
    try:
        parse_format(fmt)
    except FormatSpecError as e:
        logger.warning("Ignoring date format from %s: %s", origin, e)
        return DEFAULT_DATE_FORMAT
    return fmt


def load_settings(path: Path | None = None) -> Settings:
    """Defaults, then the JSON file at ``path`` (if any), then READABLE_DATES_FORMAT.

    A broken file or an unusable format falls back to the defaults with a warning.
    """

    settings = Settings()
    origin = "defaults"

    if path is not None and path.exists():
        try:
            obj = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read settings %s: %s", path, e)
            obj = {}
        if isinstance(obj, dict):
            settings = Settings.from_dict(obj)
            origin = str(path)

    load_dotenv()
    env_fmt = os.environ.get(FORMAT_ENV_VAR, "").strip()
    if env_fmt:
        settings.date_format = env_fmt
        origin = FORMAT_ENV_VAR

    settings.date_format = _valid_or_default(settings.date_format, origin)
    return settings


def save_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")
