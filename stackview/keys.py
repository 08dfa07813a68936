from __future__ import annotations

import os
import select
import sys
import termios
import tty
from typing import Any

ESCAPE_SEQUENCES = {
    "[A": "UP",
    "[B": "DOWN",
    "[C": "RIGHT",
    "[D": "LEFT",
    "OA": "UP",
    "OB": "DOWN",
    "OC": "RIGHT",
    "OD": "LEFT",
    "[5~": "PGUP",
    "[6~": "PGDN",
}


def decode_escape(sequence: str) -> str:
    if not sequence:
        return "ESC"
    return ESCAPE_SEQUENCES.get(sequence, "UNKNOWN")


def decode_key(key: str) -> str:
    if key in {"\r", "\n"}:
        return "ENTER"
    if key in {"\x7f", "\b"}:
        return "BACKSPACE"
    if key == "\x03":
        return "QUIT"
    return key


class KeyReader:
    def __init__(self, stream: Any = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._fd = -1
        self._old_settings: list[Any] | None = None

    def __enter__(self) -> KeyReader:
        self._fd = self._stream.fileno()
        self._old_settings = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._old_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
            self._old_settings = None

    def _ready(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)

    def _read_char(self) -> str:
        return os.read(self._fd, 1).decode("utf-8", errors="ignore")

    def read_key(self, timeout: float) -> str | None:
        if not self._ready(max(0.0, timeout)):
            return None
        key = self._read_char()
        if not key:
            return None
        if key != "\x1b":
            return decode_key(key)

        sequence = ""
        while self._ready(0.001):
            sequence += self._read_char()
            if len(sequence) < 2:
                continue
            if sequence[-1].isalpha() or sequence.endswith("~") or len(sequence) >= 6:
                break
        return decode_escape(sequence)
