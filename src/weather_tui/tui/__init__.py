"""Interactive full-screen weather search."""

from .app import WeatherTUI
from .editor import LineEditor
from .models import KeyResult, StatusEvent
from .state import TuiState
from .status_feed import StatusFeed

__all__ = ["KeyResult", "LineEditor", "StatusEvent", "StatusFeed", "TuiState", "WeatherTUI"]
