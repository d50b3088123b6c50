"""Typed settings loader for weather-tui."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyHttpUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

UnitSystem = Literal["metric", "imperial"]

_UNIT_SYSTEMS: dict[str, dict[str, str]] = {
    "metric": {
        "temperature_unit": "celsius",
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    },
    "imperial": {
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "precipitation_unit": "inch",
    },
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    geocoding_url: AnyHttpUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="WEATHER_TUI_GEOCODING_URL",
    )
    forecast_url: AnyHttpUrl = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="WEATHER_TUI_FORECAST_URL",
    )
    api_key: str | None = Field(default=None, alias="WEATHER_TUI_API_KEY", repr=False)
    language: str = Field(default="en", alias="WEATHER_TUI_LANGUAGE")
    user_agent: str = Field(default="weather-tui/0.1", alias="WEATHER_TUI_USER_AGENT")

    timeout_seconds: float = Field(default=5.0, alias="WEATHER_TUI_TIMEOUT_SECONDS")
    max_retries: int = Field(default=1, alias="WEATHER_TUI_MAX_RETRIES")
    retry_delay_seconds: float = Field(default=0.5, alias="WEATHER_TUI_RETRY_DELAY_SECONDS")

    temperature_unit: Literal["celsius", "fahrenheit"] = Field(
        default="celsius",
        alias="WEATHER_TUI_TEMPERATURE_UNIT",
    )
    wind_speed_unit: Literal["kmh", "ms", "mph", "kn"] = Field(
        default="kmh",
        alias="WEATHER_TUI_WIND_SPEED_UNIT",
    )
    precipitation_unit: Literal["mm", "inch"] = Field(
        default="mm",
        alias="WEATHER_TUI_PRECIPITATION_UNIT",
    )

    history_path: Path = Field(
        default=Path("~/.weather_searcher_history.json"),
        alias="WEATHER_TUI_HISTORY_PATH",
        validate_default=True,
    )
    history_limit: int = Field(default=50, alias="WEATHER_TUI_HISTORY_LIMIT")
    autocomplete_min_chars: int = Field(default=3, alias="WEATHER_TUI_AUTOCOMPLETE_MIN_CHARS")
    autocomplete_count: int = Field(default=10, alias="WEATHER_TUI_AUTOCOMPLETE_COUNT")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        alias="WEATHER_TUI_LOG_LEVEL",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env-string API key as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("history_path", mode="after")
    @classmethod
    def expand_history_path(cls, value: Path) -> Path:
        return value.expanduser()

    @model_validator(mode="after")
    def validate_limits(self) -> Settings:
        """Validate numeric bounds that pydantic types alone do not express."""
        if self.timeout_seconds <= 0:
            raise ValueError("WEATHER_TUI_TIMEOUT_SECONDS must be > 0.")
        if self.max_retries < 0:
            raise ValueError("WEATHER_TUI_MAX_RETRIES must be >= 0.")
        if self.retry_delay_seconds < 0:
            raise ValueError("WEATHER_TUI_RETRY_DELAY_SECONDS must be >= 0.")
        if self.history_limit <= 0:
            raise ValueError("WEATHER_TUI_HISTORY_LIMIT must be > 0.")
        if self.autocomplete_min_chars <= 0:
            raise ValueError("WEATHER_TUI_AUTOCOMPLETE_MIN_CHARS must be > 0.")
        if not (1 <= self.autocomplete_count <= 100):
            raise ValueError("WEATHER_TUI_AUTOCOMPLETE_COUNT must be between 1 and 100.")
        if not self.language.strip():
            raise ValueError("WEATHER_TUI_LANGUAGE must not be empty.")
        if not self.user_agent.strip():
            raise ValueError("WEATHER_TUI_USER_AGENT must not be empty.")
        return self

    def with_unit_system(self, system: UnitSystem) -> Settings:
        """Return a copy with temperature/wind/precipitation units for a unit system."""
        return self.model_copy(update=_UNIT_SYSTEMS[system])

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "geocoding_url": str(self.geocoding_url),
            "forecast_url": str(self.forecast_url),
            "api_key_set": self.api_key is not None,
            "language": self.language,
            "timeout_seconds": self.timeout_seconds,
            "max_retries": self.max_retries,
            "temperature_unit": self.temperature_unit,
            "wind_speed_unit": self.wind_speed_unit,
            "precipitation_unit": self.precipitation_unit,
            "history_path": str(self.history_path),
            "history_limit": self.history_limit,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
