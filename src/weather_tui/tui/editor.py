"""Single-line text editor with a character-indexed cursor."""

from __future__ import annotations


class LineEditor:
    """Search box contents plus cursor; positions count characters, not bytes."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = len(text)

    def __len__(self) -> int:
        return len(self.text)

    def set_text(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def insert(self, char: str) -> None:
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += len(char)

    def backspace(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def delete(self) -> None:
        """Delete the character under the cursor."""
        if self.cursor < len(self.text):
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)

    def next_word(self) -> None:
        """Skip the rest of the current word, then the whitespace after it."""
        pos = self.cursor
        while pos < len(self.text) and not self.text[pos].isspace():
            pos += 1
        while pos < len(self.text) and self.text[pos].isspace():
            pos += 1
        self.cursor = pos

    def prev_word(self) -> None:
        """Move to the start of the current or previous word."""
        if self.cursor == 0:
            return
        pos = min(self.cursor - 1, len(self.text) - 1)
        while pos > 0 and self.text[pos].isspace():
            pos -= 1
        while pos > 0 and not self.text[pos - 1].isspace():
            pos -= 1
        self.cursor = pos
