"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import GeoCandidate, Location, WeatherRecord


class WeatherClient(ABC):
    """Base contract for geocoding + current-conditions providers."""

    @abstractmethod
    def geocode(self, query: str, *, count: int = 1) -> list[GeoCandidate]:
        """Search places by name or postal code; empty list when nothing matches."""

    @abstractmethod
    def fetch_current(self, location: Location) -> WeatherRecord:
        """Fetch and normalize current conditions for a resolved location."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
