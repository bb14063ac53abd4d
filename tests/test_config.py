from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from readable_dates.config import FORMAT_ENV_VAR, Settings, load_settings, save_settings
from readable_dates.date.types import DEFAULT_DATE_FORMAT


@pytest.fixture(autouse=True)
def _no_env_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(FORMAT_ENV_VAR, raising=False)


def test_defaults_without_file(tmp_path: Path) -> None:
    assert load_settings(None).date_format == DEFAULT_DATE_FORMAT
    assert load_settings(tmp_path / "missing.json").date_format == DEFAULT_DATE_FORMAT


def test_save_then_load(tmp_path: Path) -> None:
    p = tmp_path / "cfg" / "settings.json"
    save_settings(Settings(date_format="DD MMM YYYY"), p)

    assert json.loads(p.read_text(encoding="utf-8")) == {"dateFormat": "DD MMM YYYY"}
    assert load_settings(p).date_format == "DD MMM YYYY"


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"dateFormat": "YYYY-MMM-DD", "theme": "dark"}), encoding="utf-8")
    assert load_settings(p) == Settings(date_format="YYYY-MMM-DD")


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    p = tmp_path / "settings.json"
    save_settings(Settings(date_format="DD MMM YYYY"), p)
    monkeypatch.setenv(FORMAT_ENV_VAR, "MMM DD YYYY")

    assert load_settings(p).date_format == "MMM DD YYYY"


def test_invalid_format_falls_back(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"dateFormat": "HH:mm"}), encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="readable_dates.config"):
        s = load_settings(p)

    assert s.date_format == DEFAULT_DATE_FORMAT
    assert "Ignoring date format" in caplog.text


def test_broken_json_falls_back(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text("{not json", encoding="utf-8")
    assert load_settings(p).date_format == DEFAULT_DATE_FORMAT
