"""Backend-independent key events.

Backends translate their native input into a ``KeyEvent``: the printable
characters received this tick plus the named keys pressed this tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Key(str, Enum):
    """Named keys understood by the prompts."""

    ENTER = "Enter"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    ESCAPE = "Escape"
    SPACE = "Space"
    INTERRUPT = "Interrupt"  # Ctrl+C / Ctrl+D or a host-defined abort chord


ABORT_KEYS = frozenset({Key.ESCAPE, Key.INTERRUPT})


@dataclass
class KeyEvent:
    """Keyboard input for one tick."""

    chars: list[str] = field(default_factory=list)
    codes: list[Key] = field(default_factory=list)

    @classmethod
    def key(cls, *codes: Key) -> KeyEvent:
        return cls(codes=list(codes))

    @classmethod
    def char(cls, ch: str) -> KeyEvent:
        """A single typed character. Space also reports ``Key.SPACE``."""
        return cls(chars=[ch], codes=[Key.SPACE] if ch == " " else [])

    @classmethod
    def text(cls, text: str) -> KeyEvent:
        """Several characters arriving in one tick (e.g. a paste)."""
        return cls(chars=list(text))

    def has(self, *codes: Key) -> bool:
        return any(code in self.codes for code in codes)

    def has_char(self, *chars: str) -> bool:
        return any(ch in self.chars for ch in chars)

    def printable(self) -> Iterable[str]:
        """Characters safe to insert into a line buffer."""
        return (ch for ch in self.chars if ch.isprintable())

    def is_abort(self) -> bool:
        return any(code in ABORT_KEYS for code in self.codes)

    def is_empty(self) -> bool:
        return not self.chars and not self.codes
