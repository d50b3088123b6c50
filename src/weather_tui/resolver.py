"""Turn free-text location input into a resolved Location."""

from __future__ import annotations

import logging
import re

from .exceptions import InvalidLocation
from .weather.base import WeatherClient
from .weather.models import GeoCandidate, Location

_COORDINATES_RE = re.compile(
    r"^\s*(?P<lat>[+-]?\d+(?:\.\d+)?)\s*,\s*(?P<lon>[+-]?\d+(?:\.\d+)?)\s*$"
)


def parse_coordinates(text: str) -> tuple[float, float] | None:
    """Parse "lat,lon"; None when the text is not a coordinate pair."""
    match = _COORDINATES_RE.match(text)
    if match is None:
        return None
    lat = float(match.group("lat"))
    lon = float(match.group("lon"))
    if not (-90 <= lat <= 90):
        raise InvalidLocation(f"Invalid latitude {lat}; expected between -90 and 90.")
    if not (-180 <= lon <= 180):
        raise InvalidLocation(f"Invalid longitude {lon}; expected between -180 and 180.")
    return lat, lon


class LocationResolver:
    """Resolves city names, postal codes and coordinate pairs."""

    def __init__(
        self,
        client: WeatherClient,
        logger: logging.Logger,
        *,
        autocomplete_min_chars: int = 3,
        autocomplete_count: int = 10,
    ) -> None:
        self.client = client
        self.logger = logger
        self.autocomplete_min_chars = autocomplete_min_chars
        self.autocomplete_count = autocomplete_count

    def resolve(self, text: str) -> Location:
        """Return a fully-populated Location or raise InvalidLocation.

        Network and provider failures during geocoding are not location
        errors and propagate unchanged.
        """
        query = text.strip() if isinstance(text, str) else ""
        if not query:
            raise InvalidLocation("Location must not be empty.")

        coords = parse_coordinates(query)
        if coords is not None:
            lat, lon = coords
            return Location(
                query=query,
                name=f"{lat:.4f}, {lon:.4f}",
                latitude=lat,
                longitude=lon,
                source="coordinates",
            )

        candidates = self.client.geocode(query, count=1)
        if candidates:
            return Location.from_candidate(query, candidates[0])

        fallback = self._resolve_qualified(query)
        if fallback is not None:
            return fallback
        raise InvalidLocation(f"'{query}' not found. Try a different city name.")

    def suggest(self, prefix: str) -> list[GeoCandidate]:
        """Return autocomplete candidates for a partially typed location."""
        query = prefix.strip()
        if len(query) < self.autocomplete_min_chars:
            return []
        return self.client.geocode(query, count=self.autocomplete_count)

    def _resolve_qualified(self, query: str) -> Location | None:
        # "Paris, France" style input: geocoding only matches bare place names.
        if "," not in query:
            return None
        name, _, qualifier = query.partition(",")
        name = name.strip()
        qualifier = qualifier.strip().casefold()
        if not name:
            return None

        candidates = self.client.geocode(name, count=self.autocomplete_count)
        if not candidates:
            return None
        self.logger.debug("Retrying qualified location %r as %r", query, name)
        for candidate in candidates:
            labels = {
                (candidate.country or "").casefold(),
                (candidate.country_code or "").casefold(),
                (candidate.admin1 or "").casefold(),
            }
            if qualifier and qualifier in labels:
                return Location.from_candidate(query, candidate)
        if not qualifier:
            return Location.from_candidate(query, candidates[0])
        return None
