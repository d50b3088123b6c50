"""Shared payloads and models for weather-tui tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from weather_tui.weather.models import (
    GeoCandidate,
    Location,
    WeatherRecord,
    WeatherReport,
    WeatherUnits,
)


@pytest.fixture
def geocoding_payload() -> dict[str, Any]:
    return {
        "results": [
            {
                "id": 2950159,
                "name": "Berlin",
                "latitude": 52.52437,
                "longitude": 13.41053,
                "country_code": "DE",
                "admin1": "Land Berlin",
                "country": "Germany",
            }
        ],
        "generationtime_ms": 0.61,
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "utc_offset_seconds": 7200,
        "timezone": "Europe/Berlin",
        "current_units": {
            "time": "iso8601",
            "interval": "seconds",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "apparent_temperature": "°C",
            "precipitation": "mm",
            "weather_code": "wmo code",
            "wind_speed_10m": "km/h",
            "pressure_msl": "hPa",
        },
        "current": {
            "time": "2026-10-19T14:15",
            "interval": 900,
            "temperature_2m": 13.4,
            "relative_humidity_2m": 71,
            "apparent_temperature": 11.9,
            "precipitation": 0.0,
            "weather_code": 3,
            "wind_speed_10m": 12.2,
            "pressure_msl": 1018.3,
        },
    }


@pytest.fixture
def berlin_candidate() -> GeoCandidate:
    return GeoCandidate(
        name="Berlin",
        latitude=52.52437,
        longitude=13.41053,
        country="Germany",
        country_code="DE",
        admin1="Land Berlin",
    )


@pytest.fixture
def berlin(berlin_candidate: GeoCandidate) -> Location:
    return Location.from_candidate("Berlin", berlin_candidate)


@pytest.fixture
def record() -> WeatherRecord:
    return WeatherRecord(
        timestamp=datetime(2026, 10, 19, 12, 15, tzinfo=UTC),
        temperature=13.4,
        apparent_temperature=11.9,
        condition_code=3,
        wind_speed=12.2,
        humidity=71,
        pressure=1018.3,
        precipitation=0.0,
        units=WeatherUnits(temperature="°C", wind_speed="km/h", pressure="hPa", precipitation="mm"),
    )


@pytest.fixture
def report(berlin: Location, record: WeatherRecord) -> WeatherReport:
    return WeatherReport(location=berlin, record=record)
