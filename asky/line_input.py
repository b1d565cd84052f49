"""Single-line input buffer with a cursor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CursorMove(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class LineInput:
    """Text buffer plus cursor column.

    ``col`` always stays within ``[0, len(value)]``.
    """

    value: str = ""
    col: int = 0

    def set_value(self, value: str) -> None:
        self.value = value
        self.col = len(value)

    def insert(self, ch: str) -> None:
        self.value = self.value[: self.col] + ch + self.value[self.col :]
        self.col += len(ch)

    def backspace(self) -> None:
        if self.value and self.col > 0:
            self.value = self.value[: self.col - 1] + self.value[self.col :]
            self.col -= 1

    def delete(self) -> None:
        if self.col < len(self.value):
            self.value = self.value[: self.col] + self.value[self.col + 1 :]

    def move_cursor(self, direction: CursorMove) -> None:
        if direction is CursorMove.LEFT:
            self.col = max(self.col - 1, 0)
        else:
            self.col = min(self.col + 1, len(self.value))
