"""Typed models for resolved locations and current-conditions records."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .codes import describe_weather_code


def _place_label(name: str, admin1: str | None, country: str | None) -> str:
    label = name
    if admin1 and admin1 != name:
        label = f"{label}, {admin1}"
    if country:
        label = f"{label} ({country})"
    return label


class GeoCandidate(BaseModel):
    """One geocoding search hit, used for suggestions and resolution."""

    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    country: str | None = None
    country_code: str | None = None
    admin1: str | None = None

    @property
    def suggestion_label(self) -> str:
        return _place_label(self.name, self.admin1, self.country)

    @property
    def accept_text(self) -> str:
        """Text placed in the search box when this suggestion is accepted."""
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


class Location(BaseModel):
    """Resolved, immutable location ready for a forecast lookup."""

    model_config = ConfigDict(frozen=True)

    query: str
    name: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    country: str | None = None
    country_code: str | None = None
    admin1: str | None = None
    source: Literal["geocoded", "coordinates"] = "geocoded"

    @property
    def display_name(self) -> str:
        return _place_label(self.name, self.admin1, self.country)

    @classmethod
    def from_candidate(cls, query: str, candidate: GeoCandidate) -> Location:
        return cls(
            query=query,
            name=candidate.name,
            latitude=candidate.latitude,
            longitude=candidate.longitude,
            country=candidate.country,
            country_code=candidate.country_code,
            admin1=candidate.admin1,
            source="geocoded",
        )


class WeatherUnits(BaseModel):
    """Unit labels reported by the provider alongside the values."""

    model_config = ConfigDict(frozen=True)

    temperature: str
    wind_speed: str
    pressure: str
    precipitation: str


class WeatherRecord(BaseModel):
    """Current-conditions snapshot; every field is required."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    temperature: float
    apparent_temperature: float
    condition_code: int
    wind_speed: float
    humidity: float
    pressure: float
    precipitation: float
    units: WeatherUnits

    @property
    def condition(self) -> str:
        return describe_weather_code(self.condition_code)


class WeatherReport(BaseModel):
    """A location paired with its current conditions."""

    model_config = ConfigDict(frozen=True)

    location: Location
    record: WeatherRecord
