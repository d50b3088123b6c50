"""Resolve -> fetch pipeline shared by the one-shot CLI and the TUI."""

from __future__ import annotations

import logging

from .resolver import LocationResolver
from .weather.base import WeatherClient
from .weather.models import WeatherReport


class WeatherService:
    """Looks up current conditions for free-text location input."""

    def __init__(
        self,
        *,
        resolver: LocationResolver,
        client: WeatherClient,
        logger: logging.Logger,
    ) -> None:
        self.resolver = resolver
        self.client = client
        self.logger = logger

    def lookup(self, text: str) -> WeatherReport:
        location = self.resolver.resolve(text)
        self.logger.info(
            "Resolved %r to %s (%.4f, %.4f)",
            location.query,
            location.display_name,
            location.latitude,
            location.longitude,
        )
        record = self.client.fetch_current(location)
        return WeatherReport(location=location, record=record)
