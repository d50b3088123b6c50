"""Structured stderr logging for weather-tui.

The one-shot CLI writes JSON lines to stderr. While the interactive screen
is up, `WeatherTUI` swaps these handlers for its status-line handler and
restores them on exit.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text

LOGGER_NAME = "weather_tui"


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per record, with secrets masked."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        # Autocomplete lookups log from a worker thread.
        if record.threadName and record.threadName != threading.main_thread().name:
            event["thread"] = record.threadName
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, ensure_ascii=False, default=str)


def setup_logger(name: str = LOGGER_NAME, level: int | str = logging.WARNING) -> logging.Logger:
    """Return the application logger, adding the stderr JSON handler once.

    Calling again only changes the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if not any(isinstance(h.formatter, JsonConsoleFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonConsoleFormatter())
        logger.addHandler(handler)
    return logger
