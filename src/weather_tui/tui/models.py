"""Typed state/event models for the interactive terminal UI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

Mode = Literal["normal", "insert"]
Screen = Literal["input", "loading", "display", "error"]
Pane = Literal["search", "history"]
Severity = Literal["INFO", "WARN", "ERROR", "CRITICAL"]
Action = Literal["search", "quit"]


@dataclass(slots=True)
class StatusEvent:
    """One status-line message with a repeat counter."""

    ts: datetime
    severity: Severity
    message: str
    count: int = 1

    def __post_init__(self) -> None:
        if self.ts.tzinfo is None:
            self.ts = self.ts.replace(tzinfo=UTC)
        else:
            self.ts = self.ts.astimezone(UTC)

    @property
    def label(self) -> str:
        if self.count > 1:
            return f"{self.message} (x{self.count})"
        return self.message


@dataclass(frozen=True, slots=True)
class KeyResult:
    """What the run loop must do after a key press, if anything."""

    action: Action | None = None
    query: str | None = None
    autocomplete_query: str | None = None
