"""Weather provider integrations."""

from .base import WeatherClient
from .codes import describe_weather_code
from .models import GeoCandidate, Location, WeatherRecord, WeatherReport, WeatherUnits
from .openmeteo import OpenMeteoClient

__all__ = [
    "GeoCandidate",
    "Location",
    "OpenMeteoClient",
    "WeatherClient",
    "WeatherRecord",
    "WeatherReport",
    "WeatherUnits",
    "describe_weather_code",
]
