# tests/test_utils.py
from __future__ import annotations

import json
import logging
import sys
from datetime import date, datetime, timedelta, timezone

import pytest

from sitez.utils import config
from sitez.utils.config import DEFAULT_AI_MODEL, AIConfig, load_settings, save_settings
from sitez.utils.dates import date_or_today, fmt_date, fmt_day_month, midnight_utc, parse_utc, today_iso
from sitez.utils.formatting import budget_used_pct, format_brl, format_pct
from sitez.utils.logging_setup import setup_logging

UTC = timezone.utc


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2023-01-15", datetime(2023, 1, 15, tzinfo=UTC)),
        ("2023-01-15T08:30:00Z", datetime(2023, 1, 15, 8, 30, tzinfo=UTC)),
        ("2023-01-15T08:30:00", datetime(2023, 1, 15, 8, 30, tzinfo=UTC)),
        ("2023-01-15T22:00:00-03:00", datetime(2023, 1, 16, 1, 0, tzinfo=UTC)),
        (date(2023, 1, 15), datetime(2023, 1, 15, tzinfo=UTC)),
        (datetime(2023, 1, 15, 6, tzinfo=timezone(timedelta(hours=2))), datetime(2023, 1, 15, 4, tzinfo=UTC)),
    ],
)
def test_parse_utc(value, expected):
    assert parse_utc(value) == expected


@pytest.mark.parametrize("bad", ["", "   ", "15/01/2023"])
def test_parse_utc_rejects(bad):
    with pytest.raises(ValueError):
        parse_utc(bad)


def test_midnight_and_display_formats():
    assert midnight_utc("2024-06-01T18:30:00-03:00") == datetime(2024, 6, 1, tzinfo=UTC)
    assert fmt_date("2023-02-11") == "11/02/2023"
    assert fmt_day_month("2023-02-11") == "11/02"


def test_date_or_today_uses_utc_calendar_date():
    assert date_or_today("2024-06-01T22:30:00-03:00") == "2024-06-02"
    assert date_or_today("2023-01-15") == "2023-01-15"


@pytest.mark.parametrize("missing", [None, "", "not a date"])
def test_date_or_today_falls_back_to_today(missing):
    assert date_or_today(missing) == today_iso()


@pytest.mark.parametrize(
    "amount,text",
    [
        (0, "R$ 0,00"),
        (950, "R$ 950,00"),
        (1234.5, "R$ 1.234,50"),
        (5_000_000, "R$ 5.000.000,00"),
        (-250_000, "-R$ 250.000,00"),
    ],
)
def test_format_brl(amount, text):
    assert format_brl(amount) == text


def test_budget_percentage():
    assert format_pct(budget_used_pct(950_000, 1_200_000)) == "79%"
    assert budget_used_pct(10, 0) == 0.0


def test_ai_config_env_precedence(monkeypatch):
    for var in ("GEMINI_API_KEY", "API_KEY", "SITEZ_AI_MODEL"):
        monkeypatch.delenv(var, raising=False)
    settings = {"ai": {"api_key": "from-settings", "model": "gemini-settings"}}

    assert AIConfig.from_env(settings) == AIConfig("from-settings", "gemini-settings")

    monkeypatch.setenv("API_KEY", "generic")
    assert AIConfig.from_env(settings).api_key == "generic"

    monkeypatch.setenv("GEMINI_API_KEY", "gemini")
    monkeypatch.setenv("SITEZ_AI_MODEL", "gemini-env")
    cfg = AIConfig.from_env(settings)
    assert cfg.api_key == "gemini"
    assert cfg.model == "gemini-env"
    assert cfg.enabled


def test_ai_config_disabled_without_key(monkeypatch):
    for var in ("GEMINI_API_KEY", "API_KEY", "SITEZ_AI_MODEL"):
        monkeypatch.delenv(var, raising=False)
    cfg = AIConfig.from_env({})
    assert not cfg.enabled
    assert cfg.model == DEFAULT_AI_MODEL


def test_load_settings_merges_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"main_window": {"width": 1600}, "ai": {"model": "gemini-x"}}), encoding="utf-8")
    s = load_settings(path)
    assert s["main_window"]["width"] == 1600
    assert s["main_window"]["height"] == 800
    assert s["ai"]["model"] == "gemini-x"
    assert s["ui"]["diagnostics_dock_visible"] is False


def test_load_settings_bad_file_falls_back(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == config._DEFAULTS
    assert "Ignoring unreadable settings" in caplog.text


def test_save_then_load(tmp_path):
    path = tmp_path / "settings.json"
    data = load_settings(tmp_path / "missing.json")
    data["ui"]["diagnostics_dock_visible"] = True
    save_settings(data, path)
    assert load_settings(path)["ui"]["diagnostics_dock_visible"] is True


def test_setup_logging_writes_to_log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    log_file = setup_logging("siteZ-test", log_dir=tmp_path)
    try:
        assert log_file.parent == tmp_path
        logging.getLogger("sitez.test").warning("hello from test")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        root = logging.getLogger()
        for h in [h for h in root.handlers if getattr(h, "_sitez_handler", False)]:
            root.removeHandler(h)
            h.close()
