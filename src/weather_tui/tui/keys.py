"""Raw terminal key input decoded into key names."""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from typing import Any, TextIO

_CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl-c",
    "\x04": "ctrl-d",
}

_ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "[H": "home",
    "[F": "end",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "OH": "home",
    "OF": "end",
    "[1~": "home",
    "[7~": "home",
    "[4~": "end",
    "[8~": "end",
    "[3~": "delete",
    "[Z": "shift-tab",
}


def decode_keys(text: str) -> list[str]:
    """Split a chunk of terminal input into key names.

    Printable characters map to themselves; a lone ESC (not followed by
    a recognised sequence) is "esc". Unrecognised escape sequences are
    dropped.
    """
    keys: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\x1b":
            key, consumed = _decode_escape(text, i)
            if key is not None:
                keys.append(key)
            i += consumed
            continue
        if char in _CONTROL_KEYS:
            keys.append(_CONTROL_KEYS[char])
            # Treat CRLF as a single Enter.
            if char == "\r" and text[i + 1 : i + 2] == "\n":
                i += 1
        elif char.isprintable():
            keys.append(char)
        i += 1
    return keys


def _decode_escape(text: str, start: int) -> tuple[str | None, int]:
    rest = text[start + 1 :]
    if not rest or rest[0] not in "[O":
        return "esc", 1
    for sequence, name in _ESCAPE_SEQUENCES.items():
        if rest.startswith(sequence):
            return name, 1 + len(sequence)
    # CSI sequence we don't know: skip through its final byte.
    end = 1
    while end < len(rest) and not ("@" <= rest[end] <= "~"):
        end += 1
    if end < len(rest):
        return None, 2 + end
    return "esc", 1


class KeyReader:
    """Puts the terminal in cbreak mode and polls it for key presses."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdin
        self._fd = self.stream.fileno()
        self._saved_attrs: list[Any] | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __enter__(self) -> KeyReader:
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def poll(self, timeout: float) -> list[str]:
        """Return keys pressed within `timeout` seconds (possibly none)."""
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return []
        data = os.read(self._fd, 64)
        return decode_keys(self._decoder.decode(data))
