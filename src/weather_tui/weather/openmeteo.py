"""Open-Meteo geocoding and current-conditions client."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import NetworkError, ProviderError
from ..redaction import sanitize_for_logging, sanitize_text
from .base import WeatherClient
from .models import GeoCandidate, Location, WeatherRecord, WeatherUnits

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
    "pressure_msl",
)


class OpenMeteoClient(WeatherClient):
    """Fetches geocoding hits and current conditions from the Open-Meteo APIs."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._max_retries = settings.max_retries
        self._retry_delay = settings.retry_delay_seconds
        self._client = httpx.Client(
            timeout=settings.timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.user_agent,
            },
            transport=transport,
        )

    def __enter__(self) -> OpenMeteoClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def geocode(self, query: str, *, count: int = 1) -> list[GeoCandidate]:
        """Search places by name or postal code."""
        params: dict[str, Any] = {
            "name": query,
            "count": count,
            "language": self.settings.language,
            "format": "json",
        }
        payload = self._request_json(
            str(self.settings.geocoding_url), params=params, context="geocoding"
        )
        raw_results = payload.get("results")
        # Open-Meteo omits "results" entirely when nothing matches.
        if raw_results is None:
            return []
        if not isinstance(raw_results, list):
            raise ProviderError("Failed to parse location data from weather service.")

        candidates: list[GeoCandidate] = []
        for item in raw_results:
            candidate = self._normalize_candidate(item)
            if candidate is not None:
                candidates.append(candidate)
        if raw_results and not candidates:
            raise ProviderError("Failed to parse location data from weather service.")
        return candidates

    def fetch_current(self, location: Location) -> WeatherRecord:
        """Fetch current conditions for a resolved location."""
        params: dict[str, Any] = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": ",".join(CURRENT_FIELDS),
            "temperature_unit": self.settings.temperature_unit,
            "wind_speed_unit": self.settings.wind_speed_unit,
            "precipitation_unit": self.settings.precipitation_unit,
            "timezone": "auto",
        }
        payload = self._request_json(
            str(self.settings.forecast_url), params=params, context="weather fetch"
        )
        return self._normalize_current(payload)

    def _request_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        context: str,
    ) -> dict[str, Any]:
        if self.settings.api_key:
            params = {**params, "apikey": self.settings.api_key}
        self.logger.debug("Open-Meteo %s request: %s", context, sanitize_for_logging(params))

        for attempt in range(self._max_retries + 1):
            try:
                response = self._client.get(url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                raise ProviderError(
                    f"Weather service {context} failed with status {status}: "
                    f"{sanitize_text(self._error_reason(exc.response))}",
                    status_code=status,
                ) from exc
            except httpx.TransportError as exc:
                if attempt < self._max_retries:
                    self.logger.warning(
                        "Open-Meteo %s request failed (%s); retrying",
                        context,
                        type(exc).__name__,
                    )
                    time.sleep(self._retry_delay)
                    continue
                self.logger.error(
                    "Open-Meteo %s request failed after %d attempt(s): %s",
                    context,
                    attempt + 1,
                    sanitize_text(str(exc)),
                )
                raise self._network_error(exc) from exc
            except httpx.HTTPError as exc:
                raise ProviderError(
                    f"Weather service {context} failed: {sanitize_text(str(exc))}"
                ) from exc

            try:
                payload = response.json()
            except ValueError as exc:
                raise ProviderError(
                    f"Weather service {context} returned a non-JSON response."
                ) from exc

            if not isinstance(payload, dict):
                raise ProviderError(
                    f"Weather service {context} returned unexpected payload type "
                    f"{type(payload).__name__}."
                )
            return payload

        raise NetworkError(f"Network error: {context} was never attempted.")

    @staticmethod
    def _network_error(exc: httpx.TransportError) -> NetworkError:
        if isinstance(exc, httpx.TimeoutException):
            return NetworkError(
                "Connection timeout. Check your internet connection.",
                category="timeout",
            )
        if isinstance(exc, httpx.ConnectError):
            return NetworkError(
                "Cannot connect to weather service. Check your internet connection.",
                category="connect",
            )
        return NetworkError(f"Network error: {sanitize_text(str(exc))}", category="network")

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:300]
        if isinstance(body, dict) and isinstance(body.get("reason"), str):
            return body["reason"]
        return response.text[:300]

    def _normalize_candidate(self, item: Any) -> GeoCandidate | None:
        if not isinstance(item, dict):
            return None
        name = self._as_str(item.get("name"))
        lat = self._as_float(item.get("latitude"))
        lon = self._as_float(item.get("longitude"))
        if name is None or lat is None or lon is None:
            self.logger.debug("Skipping unparseable geocoding hit: %s", item)
            return None
        try:
            return GeoCandidate(
                name=name,
                latitude=lat,
                longitude=lon,
                country=self._as_str(item.get("country")),
                country_code=self._as_str(item.get("country_code")),
                admin1=self._as_str(item.get("admin1")),
            )
        except ValidationError:
            self.logger.debug("Skipping out-of-range geocoding hit: %s", item)
            return None

    def _normalize_current(self, payload: dict[str, Any]) -> WeatherRecord:
        current = payload.get("current")
        units = payload.get("current_units")
        if not isinstance(current, dict):
            raise ProviderError("Weather payload missing 'current' object.")
        if not isinstance(units, dict):
            raise ProviderError("Weather payload missing 'current_units' object.")

        values: dict[str, float] = {}
        for field in CURRENT_FIELDS:
            value = self._as_float(current.get(field))
            if value is None:
                raise ProviderError(f"Weather payload missing or invalid 'current.{field}'.")
            values[field] = value

        timestamp = self._parse_time(current.get("time"), payload.get("utc_offset_seconds"))
        if timestamp is None:
            raise ProviderError("Weather payload missing or invalid 'current.time'.")

        unit_labels: dict[str, str] = {}
        for field in ("temperature_2m", "wind_speed_10m", "pressure_msl"):
            label = self._as_str(units.get(field))
            if label is None:
                raise ProviderError(f"Weather payload missing 'current_units.{field}'.")
            unit_labels[field] = label
        precip_unit = self._as_str(units.get("precipitation")) or self.settings.precipitation_unit

        try:
            return WeatherRecord(
                timestamp=timestamp,
                temperature=values["temperature_2m"],
                apparent_temperature=values["apparent_temperature"],
                condition_code=int(values["weather_code"]),
                wind_speed=values["wind_speed_10m"],
                humidity=values["relative_humidity_2m"],
                pressure=values["pressure_msl"],
                precipitation=values["precipitation"],
                units=WeatherUnits(
                    temperature=unit_labels["temperature_2m"],
                    wind_speed=unit_labels["wind_speed_10m"],
                    pressure=unit_labels["pressure_msl"],
                    precipitation=precip_unit,
                ),
            )
        except ValidationError as exc:
            raise ProviderError(f"Failed to parse weather data from service: {exc}") from exc

    @staticmethod
    def _as_str(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @staticmethod
    def _as_float(value: Any) -> float | None:
        # bool is an int subclass; a boolean is never a measurement.
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        return None

    @staticmethod
    def _parse_time(value: Any, utc_offset_seconds: Any) -> datetime | None:
        if not isinstance(value, str) or not value.strip():
            return None
        candidate = value.strip()
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            return parsed.astimezone(UTC)
        # With timezone=auto the API reports local wall time plus an offset.
        offset = utc_offset_seconds if isinstance(utc_offset_seconds, int) else 0
        return (parsed - timedelta(seconds=offset)).replace(tzinfo=UTC)
