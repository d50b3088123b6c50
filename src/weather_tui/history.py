"""Persisted search history: most recent first, de-duplicated, capped."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from .exceptions import HistoryError


class HistoryEntry(BaseModel):
    """One successful search, stamped in unix seconds."""

    query: str
    timestamp: int


_ENTRIES = TypeAdapter(list[HistoryEntry])


class SearchHistory:
    """Search history backed by a JSON array file."""

    def __init__(self, path: Path, *, limit: int = 50, logger: logging.Logger | None = None) -> None:
        self.path = path
        self.limit = limit
        self.logger = logger or logging.getLogger("weather_tui")
        self.entries: list[HistoryEntry] = []

    @classmethod
    def open(cls, path: Path, *, limit: int = 50, logger: logging.Logger | None = None) -> SearchHistory:
        """Load history from disk; unreadable or corrupt files start empty."""
        history = cls(path, limit=limit, logger=logger)
        try:
            history.entries = history.load()
        except HistoryError as exc:
            history.logger.warning("Ignoring unreadable search history: %s", exc)
        return history

    def __len__(self) -> int:
        return len(self.entries)

    def queries(self) -> list[str]:
        return [entry.query for entry in self.entries]

    def load(self) -> list[HistoryEntry]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise HistoryError(f"Failed reading history file {self.path}: {exc}") from exc
        try:
            entries = _ENTRIES.validate_json(raw)
        except ValidationError as exc:
            raise HistoryError(f"History file {self.path} is not valid: {exc}") from exc
        return entries[: self.limit]

    def add(self, query: str, *, now: float | None = None) -> HistoryEntry:
        """Move (or insert) a query to the front and persist the list.

        Save failures are logged; a search that succeeded is never failed
        because its history could not be written.
        """
        self.entries = [entry for entry in self.entries if entry.query != query]
        entry = HistoryEntry(query=query, timestamp=int(now if now is not None else time.time()))
        self.entries.insert(0, entry)
        del self.entries[self.limit :]
        try:
            self.save()
        except HistoryError as exc:
            self.logger.warning("Failed to save search history: %s", exc)
        return entry

    def save(self) -> None:
        """Write the history as pretty-printed JSON."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump(
                    [entry.model_dump(mode="json") for entry in self.entries],
                    fh,
                    ensure_ascii=False,
                    indent=2,
                )
                fh.write("\n")
        except OSError as exc:
            raise HistoryError(f"Failed writing history file {self.path}: {exc}") from exc
