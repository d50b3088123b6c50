"""Bounded status feed that collapses repeated messages."""

from __future__ import annotations

from datetime import UTC, datetime

from .models import Severity, StatusEvent


class StatusFeed:
    """Keep recent status messages; a repeat of the newest one bumps its count."""

    def __init__(self, *, max_events: int = 20) -> None:
        self.max_events = max_events
        self._events: list[StatusEvent] = []

    def add(
        self,
        *,
        severity: Severity,
        message: str,
        ts: datetime | None = None,
    ) -> StatusEvent:
        now = ts or datetime.now(UTC)
        if self._events:
            newest = self._events[-1]
            if newest.severity == severity and newest.message == message:
                newest.count += 1
                newest.ts = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)
                return newest

        event = StatusEvent(ts=now, severity=severity, message=message)
        self._events.append(event)
        del self._events[: -self.max_events]
        return event

    def snapshot(self, *, newest_first: bool = False) -> list[StatusEvent]:
        items = list(self._events)
        if newest_first:
            items.reverse()
        return items

    def count(self, severity: Severity) -> int:
        """Count messages of one severity, weighted by repeat counts."""
        return sum(event.count for event in self._events if event.severity == severity)
