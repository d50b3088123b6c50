"""Tests for the interactive key state machine and line editor."""

from __future__ import annotations

import pytest

from weather_tui.tui.editor import LineEditor
from weather_tui.tui.state import TuiState
from weather_tui.weather.models import GeoCandidate, WeatherReport


def _type(state: TuiState, text: str) -> list[str | None]:
    return [state.handle_key(char).autocomplete_query for char in text]


def _suggestions() -> list[GeoCandidate]:
    return [
        GeoCandidate(name="Berlin", latitude=52.52, longitude=13.41, country="Germany"),
        GeoCandidate(name="Bern", latitude=46.95, longitude=7.45, country="Switzerland"),
    ]


def test_starts_in_normal_mode_on_search_pane() -> None:
    state = TuiState(history=["Paris"])
    assert state.mode == "normal"
    assert state.screen == "input"
    assert state.pane == "search"


def test_typing_requests_autocomplete_from_third_character() -> None:
    state = TuiState()
    state.handle_key("i")
    assert _type(state, "Berl") == [None, None, "Ber", "Berl"]
    assert state.editor.text == "Berl"


def test_same_text_is_not_requested_twice() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Ber")
    state.handle_key("backspace")
    assert state.handle_key("r").autocomplete_query is None


def test_backspace_below_threshold_hides_suggestions() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Ber")
    state.apply_suggestions("Ber", _suggestions())
    assert state.suggestions_visible

    state.handle_key("backspace")
    assert not state.suggestions_visible
    assert state.suggestions == []


def test_stale_suggestions_are_discarded() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Berl")
    assert state.apply_suggestions("Ber", _suggestions()) is False
    assert not state.suggestions_visible
    assert state.apply_suggestions("Berl", _suggestions()) is True
    assert state.suggestions_visible


def test_arrow_keys_wrap_and_tab_accepts_suggestion() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Ber")
    state.apply_suggestions("Ber", _suggestions())

    state.handle_key("up")
    assert state.selected_suggestion == 1
    state.handle_key("down")
    assert state.selected_suggestion == 0
    state.handle_key("down")
    state.handle_key("tab")

    assert state.editor.text == "Bern, Switzerland"
    assert state.editor.cursor == len("Bern, Switzerland")
    assert not state.suggestions_visible


def test_enter_accepts_visible_suggestion_before_searching() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Ber")
    state.apply_suggestions("Ber", _suggestions())

    assert state.handle_key("enter").action is None
    assert state.editor.text == "Berlin, Germany"

    result = state.handle_key("enter")
    assert result.action == "search"
    assert result.query == "Berlin, Germany"


def test_enter_with_empty_input_does_nothing() -> None:
    state = TuiState()
    assert state.handle_key("enter").action is None
    state.handle_key("i")
    assert state.handle_key("enter").action is None


def test_esc_leaves_insert_then_quits_from_normal() -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Oslo")
    assert state.handle_key("esc").action is None
    assert state.mode == "normal"
    assert state.editor.cursor == 3
    assert state.handle_key("esc").action == "quit"


def test_ctrl_c_quits_from_any_mode() -> None:
    state = TuiState()
    state.handle_key("i")
    assert state.handle_key("ctrl-c").action == "quit"


def test_normal_mode_motions() -> None:
    state = TuiState()
    state.editor.set_text("New York City")
    state.handle_key("0")
    assert state.editor.cursor == 0
    state.handle_key("w")
    assert state.editor.cursor == 4
    state.handle_key("$")
    assert state.editor.cursor == 13
    state.handle_key("b")
    assert state.editor.cursor == 9
    state.handle_key("x")
    assert state.editor.text == "New York ity"
    state.handle_key("ctrl-d")
    assert state.editor.text == ""


def test_normal_mode_letters_do_not_edit() -> None:
    state = TuiState()
    state.handle_key("z")
    assert state.editor.text == ""
    assert state.mode == "normal"


def test_history_navigation_and_load() -> None:
    state = TuiState(history=["Paris", "Berlin", "Tokyo"])
    state.handle_key("tab")
    assert state.pane == "history"

    state.handle_key("k")
    assert state.selected_history == 2
    state.handle_key("j")
    assert state.selected_history == 0
    state.handle_key("j")
    assert state.handle_key("enter").action is None

    assert state.editor.text == "Berlin"
    assert state.pane == "search"
    assert state.mode == "insert"


def test_search_lifecycle(report: WeatherReport) -> None:
    state = TuiState()
    state.handle_key("i")
    _type(state, "Berlin")
    result = state.handle_key("enter")
    assert result.query == "Berlin"

    state.begin_search()
    assert state.screen == "loading"
    assert state.handle_key("q").action is None

    state.search_succeeded(report, ["Berlin"])
    assert state.screen == "display"
    assert state.editor.text == ""
    assert state.mode == "normal"
    assert state.history == ["Berlin"]

    state.handle_key("i")
    assert state.screen == "input"
    assert state.mode == "insert"


def test_error_screen_any_key_returns_to_normal_input() -> None:
    state = TuiState()
    state.search_failed("'Atlantis' not found. Try a different city name.")
    assert state.screen == "error"
    state.handle_key("x")
    assert state.screen == "input"
    assert state.mode == "normal"
    assert state.error_message == ""


@pytest.mark.parametrize("key", ["q", "esc"])
def test_result_screens_quit_on_q_or_esc(report: WeatherReport, key: str) -> None:
    state = TuiState()
    state.search_succeeded(report, [])
    assert state.handle_key(key).action == "quit"


def test_editor_handles_multibyte_characters() -> None:
    editor = LineEditor()
    for char in "Zürich":
        editor.insert(char)
    editor.left()
    editor.left()
    editor.left()
    editor.left()
    editor.backspace()
    assert editor.text == "Zrich"
    assert editor.cursor == 1
    editor.insert("ü")
    assert editor.text == "Zürich"


def test_editor_prev_word_from_end_and_start() -> None:
    editor = LineEditor("San  Jose")
    editor.prev_word()
    assert editor.cursor == 5
    editor.prev_word()
    assert editor.cursor == 0
    editor.prev_word()
    assert editor.cursor == 0
