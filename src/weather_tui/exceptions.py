"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class InvalidLocation(Exception):
    """Raised when a location string cannot be parsed or geocoded."""


class WeatherProviderError(Exception):
    """Base class for weather service failures."""


class NetworkError(WeatherProviderError):
    """Raised on connectivity failures and timeouts, with a failure category."""

    def __init__(self, message: str, *, category: str = "network") -> None:
        super().__init__(message)
        self.category = category


class ProviderError(WeatherProviderError):
    """Raised when the weather service returns a malformed or unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RenderError(Exception):
    """Raised when writing rendered output to the terminal fails."""


class HistoryError(Exception):
    """Raised when the search history file cannot be read or written."""
