"""Tests for settings loading and log redaction."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from weather_tui.config import Settings, load_settings
from weather_tui.exceptions import ConfigError
from weather_tui.log_setup import JsonConsoleFormatter, setup_logger
from weather_tui.redaction import REDACTED, sanitize_for_logging, sanitize_text


def test_defaults_match_open_meteo(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings(_env_file=None)
    assert str(settings.geocoding_url).startswith("https://geocoding-api.open-meteo.com/")
    assert str(settings.forecast_url).startswith("https://api.open-meteo.com/")
    assert settings.timeout_seconds == 5.0
    assert settings.max_retries == 1
    assert settings.history_limit == 50
    assert settings.autocomplete_min_chars == 3
    assert settings.history_path == tmp_path / ".weather_searcher_history.json"


def test_env_overrides_and_empty_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_TUI_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("WEATHER_TUI_TEMPERATURE_UNIT", "fahrenheit")
    monkeypatch.setenv("WEATHER_TUI_API_KEY", "")
    monkeypatch.setenv("WEATHER_TUI_LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)
    assert settings.timeout_seconds == 2.5
    assert settings.temperature_unit == "fahrenheit"
    assert settings.api_key is None
    assert settings.log_level == "DEBUG"


def test_with_unit_system_imperial() -> None:
    settings = Settings(_env_file=None).with_unit_system("imperial")
    assert settings.temperature_unit == "fahrenheit"
    assert settings.wind_speed_unit == "mph"
    assert settings.precipitation_unit == "inch"


def test_invalid_settings_raise_config_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WEATHER_TUI_TIMEOUT_SECONDS", "0")
    with pytest.raises(ConfigError, match="WEATHER_TUI_TIMEOUT_SECONDS"):
        load_settings()


def test_invalid_unit_raises_config_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WEATHER_TUI_TEMPERATURE_UNIT", "kelvin")
    with pytest.raises(ConfigError):
        load_settings()


def test_safe_summary_omits_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_TUI_API_KEY", "top-secret")
    settings = Settings(_env_file=None)
    summary = settings.safe_summary()
    assert summary["api_key_set"] is True
    assert "top-secret" not in json.dumps(summary)
    assert "top-secret" not in repr(settings)


def test_sanitize_text_redacts_apikey_query_param() -> None:
    url = "https://customer-api.open-meteo.com/v1/forecast?latitude=1&apikey=abc123&timezone=auto"
    sanitized = sanitize_text(url)
    assert "abc123" not in sanitized
    assert f"apikey={REDACTED}&timezone=auto" in sanitized


def test_sanitize_for_logging_redacts_sensitive_keys() -> None:
    payload = {"params": {"name": "Berlin", "apikey": "abc123"}, "token": "xyz"}
    assert sanitize_for_logging(payload) == {
        "params": {"name": "Berlin", "apikey": REDACTED},
        "token": REDACTED,
    }


def test_json_formatter_redacts_message() -> None:
    record = logging.LogRecord(
        name="weather_tui",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="GET %s failed",
        args=("https://api.open-meteo.com/v1/forecast?apikey=abc123",),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "WARNING"
    assert event["logger"] == "weather_tui"
    assert "abc123" not in event["message"]


def test_setup_logger_adds_json_handler_once() -> None:
    name = "weather_tui_test_setup"
    logger = setup_logger(name, level="INFO")
    setup_logger(name, level="DEBUG")
    try:
        json_handlers = [
            h for h in logger.handlers if isinstance(h.formatter, JsonConsoleFormatter)
        ]
        assert len(json_handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
    finally:
        logger.handlers = []


def test_json_formatter_tags_worker_thread_records() -> None:
    record = logging.LogRecord(
        name="weather_tui",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Autocomplete failed",
        args=(),
        exc_info=None,
    )
    record.threadName = "autocomplete_0"
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["thread"] == "autocomplete_0"
