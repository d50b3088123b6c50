"""Key-driven state machine for the interactive weather search screen."""

from __future__ import annotations

from ..weather.models import GeoCandidate, WeatherReport
from .editor import LineEditor
from .models import KeyResult, Mode, Pane, Screen

_NO_OP = KeyResult()


class TuiState:
    """Everything the view draws; mutated only through key and result handlers."""

    def __init__(
        self,
        *,
        history: list[str] | None = None,
        autocomplete_min_chars: int = 3,
    ) -> None:
        self.editor = LineEditor()
        self.mode: Mode = "normal"
        self.screen: Screen = "input"
        self.pane: Pane = "search"
        self.report: WeatherReport | None = None
        self.error_message = ""
        self.history: list[str] = list(history or [])
        self.selected_history = 0
        self.suggestions: list[GeoCandidate] = []
        self.selected_suggestion = 0
        self.show_suggestions = False
        self.last_autocomplete_query = ""
        self.autocomplete_min_chars = autocomplete_min_chars

    @property
    def suggestions_visible(self) -> bool:
        return self.show_suggestions and bool(self.suggestions)

    def handle_key(self, key: str) -> KeyResult:
        """Apply one decoded key press and report any work for the run loop."""
        if key == "ctrl-c":
            return KeyResult(action="quit")
        if self.screen == "loading":
            return _NO_OP
        if self.screen in {"display", "error"}:
            return self._handle_result_screen_key(key)
        if self.mode == "normal":
            return self._handle_normal_key(key)
        return self._handle_insert_key(key)

    def begin_search(self) -> None:
        self.screen = "loading"
        self.show_suggestions = False

    def search_succeeded(self, report: WeatherReport, history: list[str]) -> None:
        self.report = report
        self.history = list(history)
        self.selected_history = 0
        self.screen = "display"
        self.editor.clear()
        self.mode = "normal"

    def search_failed(self, message: str) -> None:
        self.error_message = message
        self.screen = "error"

    def apply_suggestions(self, query: str, suggestions: list[GeoCandidate]) -> bool:
        """Install autocomplete results unless the input has moved on since the request."""
        if self.editor.text != query:
            return False
        self.suggestions = list(suggestions)
        self.show_suggestions = bool(self.suggestions)
        self.selected_suggestion = 0
        return True

    def _handle_result_screen_key(self, key: str) -> KeyResult:
        if key in {"esc", "q"}:
            return KeyResult(action="quit")
        self.screen = "input"
        self.mode = "insert" if key == "i" else "normal"
        self.error_message = ""
        self.show_suggestions = False
        return _NO_OP

    def _handle_normal_key(self, key: str) -> KeyResult:
        editor = self.editor
        if key == "i":
            self.mode = "insert"
        elif key == "I":
            self.mode = "insert"
            editor.home()
        elif key == "a":
            self.mode = "insert"
            editor.right()
        elif key == "A":
            self.mode = "insert"
            editor.end()
        elif key == "h":
            if self.pane == "search":
                editor.left()
        elif key == "l":
            if self.pane == "search":
                editor.right()
        elif key == "j":
            if self.pane == "history":
                self._step_history(1)
        elif key == "k":
            if self.pane == "history":
                self._step_history(-1)
        elif key in {"0", "^"}:
            editor.home()
        elif key == "$":
            editor.end()
        elif key == "w":
            editor.next_word()
        elif key == "b":
            editor.prev_word()
        elif key == "x":
            editor.delete()
        elif key == "ctrl-d":
            editor.clear()
        elif key == "tab":
            self._toggle_pane()
        elif key == "enter":
            if self.pane == "history":
                self._load_selected_history()
            elif editor.text:
                return KeyResult(action="search", query=editor.text)
        elif key == "esc":
            return KeyResult(action="quit")
        return _NO_OP

    def _handle_insert_key(self, key: str) -> KeyResult:
        editor = self.editor
        if key == "esc":
            self.mode = "normal"
            editor.left()
            self.show_suggestions = False
        elif len(key) == 1:
            editor.insert(key)
            return self._request_autocomplete()
        elif key == "backspace":
            editor.backspace()
            if len(editor) < self.autocomplete_min_chars:
                self.show_suggestions = False
                self.suggestions = []
            else:
                return self._request_autocomplete()
        elif key == "delete":
            editor.delete()
        elif key == "left":
            editor.left()
        elif key == "right":
            editor.right()
        elif key == "home":
            editor.home()
        elif key == "end":
            editor.end()
        elif key == "down":
            if self.show_suggestions:
                self._step_suggestion(1)
        elif key == "up":
            if self.show_suggestions:
                self._step_suggestion(-1)
        elif key == "tab":
            if self.show_suggestions:
                self._accept_suggestion()
            else:
                self._toggle_pane()
        elif key == "enter":
            if self.suggestions_visible:
                self._accept_suggestion()
            elif editor.text:
                self.show_suggestions = False
                return KeyResult(action="search", query=editor.text)
        return _NO_OP

    def _request_autocomplete(self) -> KeyResult:
        text = self.editor.text
        if len(text) >= self.autocomplete_min_chars and text != self.last_autocomplete_query:
            self.last_autocomplete_query = text
            return KeyResult(autocomplete_query=text)
        return _NO_OP

    def _accept_suggestion(self) -> None:
        if not self.suggestions_visible:
            return
        suggestion = self.suggestions[self.selected_suggestion]
        self.editor.set_text(suggestion.accept_text)
        self.show_suggestions = False
        self.suggestions = []

    def _step_suggestion(self, step: int) -> None:
        if self.suggestions:
            self.selected_suggestion = (self.selected_suggestion + step) % len(self.suggestions)

    def _step_history(self, step: int) -> None:
        if self.history:
            self.selected_history = (self.selected_history + step) % len(self.history)

    def _toggle_pane(self) -> None:
        self.pane = "history" if self.pane == "search" else "search"

    def _load_selected_history(self) -> None:
        if 0 <= self.selected_history < len(self.history):
            self.editor.set_text(self.history[self.selected_history])
            self.pane = "search"
            self.mode = "insert"
