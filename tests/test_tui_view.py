"""Tests for the interactive frame layout."""

from __future__ import annotations

from rich.console import Console

from weather_tui.tui.state import TuiState
from weather_tui.tui.status_feed import StatusFeed
from weather_tui.tui.view import build_frame, render_input_text
from weather_tui.weather.models import WeatherReport


def _render(state: TuiState, feed: StatusFeed | None = None) -> str:
    console = Console(record=True, width=140, height=30, color_system=None)
    console.print(build_frame(state, feed))
    return console.export_text()


def test_footer_shows_newest_status_messages_and_header_counts_problems() -> None:
    feed = StatusFeed()
    feed.add(severity="INFO", message="Resolved Berlin")
    feed.add(severity="WARN", message="Autocomplete failed: Connection timeout.")
    feed.add(severity="WARN", message="Autocomplete failed: Connection timeout.")
    feed.add(severity="ERROR", message="Search for 'Atlantis' failed")

    text = _render(TuiState(), feed)

    assert "3 warning(s)" in text
    assert "Search for 'Atlantis' failed" in text
    assert "Autocomplete failed: Connection timeout. (x2)" in text
    assert "Resolved Berlin" not in text


def test_quiet_feed_has_no_warning_badge() -> None:
    text = _render(TuiState(), StatusFeed())
    assert "warning(s)" not in text
    assert "-- NORMAL --" in text


def test_display_screen_shows_report_and_history(report: WeatherReport) -> None:
    state = TuiState()
    state.search_succeeded(report, ["Berlin", "Paris"])

    text = _render(state)

    assert "13.4°C" in text
    assert "Overcast" in text
    assert "Paris" in text


def test_input_cursor_rendering() -> None:
    state = TuiState()
    state.editor.set_text("Oslo")
    state.editor.home()
    assert render_input_text(state).plain == "[O]slo"
    state.handle_key("i")
    assert render_input_text(state).plain == "█Oslo"
