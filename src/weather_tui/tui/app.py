"""Interactive run loop: keyboard polling, redraws, background autocomplete."""

from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from rich.console import Console
from rich.live import Live

from ..exceptions import InvalidLocation, WeatherProviderError
from ..history import SearchHistory
from ..redaction import sanitize_text
from ..service import WeatherService
from ..weather.models import GeoCandidate
from .keys import KeyReader
from .models import Severity
from .state import TuiState
from .status_feed import StatusFeed
from .view import build_frame

POLL_INTERVAL_SECONDS = 0.05


def _severity_from_level(level_no: int) -> Severity:
    if level_no >= logging.CRITICAL:
        return "CRITICAL"
    if level_no >= logging.ERROR:
        return "ERROR"
    if level_no >= logging.WARNING:
        return "WARN"
    return "INFO"


class _StatusLogHandler(logging.Handler):
    """Route logger output into the status line instead of the screen."""

    def __init__(self, sink: queue.SimpleQueue[tuple[Severity, str]]) -> None:
        super().__init__()
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink.put(
                (_severity_from_level(record.levelno), sanitize_text(record.getMessage()))
            )
        except Exception:
            self.handleError(record)


class WeatherTUI:
    """Full-screen weather search with history and live suggestions."""

    def __init__(
        self,
        *,
        service: WeatherService,
        history: SearchHistory,
        console: Console,
        logger: logging.Logger,
        record_history: bool = True,
        key_reader: Any = None,
    ) -> None:
        self.service = service
        self.history = history
        self.console = console
        self.logger = logger
        self.record_history = record_history
        self.state = TuiState(
            history=history.queries(),
            autocomplete_min_chars=service.resolver.autocomplete_min_chars,
        )
        self.status = StatusFeed()
        self._key_reader = key_reader
        self._log_records: queue.SimpleQueue[tuple[Severity, str]] = queue.SimpleQueue()
        self._suggestions: queue.SimpleQueue[tuple[str, list[GeoCandidate]]] = (
            queue.SimpleQueue()
        )
        self._original_handlers: list[logging.Handler] = []

    def run(self) -> int:
        """Run until the user quits; returns the process exit code."""
        self._attach_logger()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="autocomplete")
        try:
            with self._keys() as keys, Live(
                self._frame(),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                while True:
                    self._drain_queues()
                    live.update(self._frame(), refresh=True)
                    for key in keys.poll(POLL_INTERVAL_SECONDS):
                        result = self.state.handle_key(key)
                        if result.action == "quit":
                            return 0
                        if result.autocomplete_query is not None:
                            executor.submit(self._autocomplete, result.autocomplete_query)
                        if result.action == "search" and result.query is not None:
                            self.state.begin_search()
                            live.update(self._frame(), refresh=True)
                            self.search(result.query)
                            break
        except KeyboardInterrupt:
            return 0
        finally:
            # Wait for an in-flight lookup: the caller closes the HTTP client next.
            executor.shutdown(wait=True, cancel_futures=True)
            self._detach_logger()

    def search(self, query: str) -> None:
        """Run one lookup synchronously and move the state to display or error."""
        self.state.begin_search()
        try:
            report = self.service.lookup(query)
        except (InvalidLocation, WeatherProviderError) as exc:
            self.logger.warning("Search for %r failed: %s", query, exc)
            self.state.search_failed(str(exc))
            return
        if self.record_history:
            self.history.add(report.location.query)
        self.state.search_succeeded(report, self.history.queries())

    def _autocomplete(self, query: str) -> None:
        try:
            suggestions = self.service.resolver.suggest(query)
        except WeatherProviderError as exc:
            self.logger.warning("Autocomplete failed: %s", exc)
            return
        self._suggestions.put((query, suggestions))

    def _drain_queues(self) -> None:
        while True:
            try:
                query, suggestions = self._suggestions.get_nowait()
            except queue.Empty:
                break
            self.state.apply_suggestions(query, suggestions)
        while True:
            try:
                severity, message = self._log_records.get_nowait()
            except queue.Empty:
                break
            self.status.add(severity=severity, message=message)

    def _frame(self) -> Any:
        return build_frame(self.state, self.status)

    def _keys(self) -> Any:
        return self._key_reader if self._key_reader is not None else KeyReader()

    def _attach_logger(self) -> None:
        self._original_handlers = list(self.logger.handlers)
        self.logger.handlers = [_StatusLogHandler(self._log_records)]

    def _detach_logger(self) -> None:
        self.logger.handlers = self._original_handlers
        self._original_handlers = []
