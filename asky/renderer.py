"""Renderer contract shared by the terminal and hosted backends.

A prompt draws itself by handing a closure to ``print_prompt``. The closure
writes text and style regions into the renderer and returns the number of
rows it produced. The renderer clears whatever the previous frame drew
before the closure runs, so each draw is a full re-render.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from rich.style import Style as TextStyle
from wcwidth import wcwidth

from .style import DefaultTheme, Section, Theme


class DrawTime(Enum):
    """Phase of a prompt's lifetime: First -> Update -> Last."""

    FIRST = "first"
    UPDATE = "update"
    LAST = "last"


def cell_width(text: str) -> int:
    """Terminal columns occupied by ``text`` (wide chars count as 2)."""
    return sum(max(wcwidth(ch), 0) for ch in text)


class Renderer(ABC):
    """Abstract draw surface.

    Subclasses implement the emission hooks; this base keeps the draw-time
    phase, the current text style and the row/column bookkeeping that
    cursor placement relies on.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme if theme is not None else DefaultTheme()
        self._draw_time = DrawTime.FIRST
        self._style: TextStyle | None = None
        self._rows = 0
        self._col = 0
        self._saved = (0, 0)
        self._cursor_visible = True

    # -- phase --

    def draw_time(self) -> DrawTime:
        return self._draw_time

    def update_draw_time(self) -> None:
        if self._draw_time is DrawTime.FIRST:
            self._draw_time = DrawTime.UPDATE
        else:
            self._draw_time = DrawTime.LAST

    # -- drawing --

    def print_prompt(self, draw: Callable[[Renderer], int]) -> int:
        """Clear the previous frame, run ``draw`` and return the rows drawn."""
        self._rows = 0
        self._col = 0
        self._saved = (0, 0)
        self._style = None
        self._pre_prompt()
        rows = draw(self)
        self._style = None
        if self._col > 0 or self._rows == 0:
            # Cursor bookkeeping needs every frame to end on a fresh line.
            self.write("\n")
            rows += 1
        self._post_prompt(rows)
        return rows

    def write(self, text: str, style: TextStyle | None = None) -> None:
        """Emit ``text`` in ``style`` (or the current region style)."""
        if not text:
            return
        lines = text.split("\n")
        self._rows += len(lines) - 1
        if len(lines) > 1:
            self._col = cell_width(lines[-1])
        else:
            self._col += cell_width(text)
        self._emit(text, style if style is not None else self._style)

    def set_style(self, style: TextStyle | None) -> None:
        self._style = style

    def begin(self, section: Section) -> None:
        self.theme.begin(self, section)

    def end(self, section: Section) -> None:
        self.theme.end(self, section)

    def newline_count(self) -> int:
        return self._rows

    # -- cursor --

    def save_cursor(self) -> None:
        """Remember the current write position as the origin for set_cursor."""
        self._saved = (self._rows, self._col)

    def set_cursor(self, position: tuple[int, int] | list[int]) -> None:
        """Place the cursor ``[x, y]`` cells from the saved position."""
        if self._draw_time is DrawTime.LAST:
            return
        x, y = position
        row, col = self._saved
        self._place_cursor(row + y, col + x)

    def show_cursor(self) -> None:
        self._cursor_visible = True
        self._set_cursor_visible(True)

    def hide_cursor(self) -> None:
        self._cursor_visible = False
        self._set_cursor_visible(False)

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    # -- hooks --

    @abstractmethod
    def _pre_prompt(self) -> None:
        """Erase the previous frame before a redraw."""

    @abstractmethod
    def _post_prompt(self, rows: int) -> None:
        """Finish a frame of ``rows`` rows."""

    @abstractmethod
    def _emit(self, text: str, style: TextStyle | None) -> None: ...

    @abstractmethod
    def _place_cursor(self, row: int, col: int) -> None: ...

    @abstractmethod
    def _set_cursor_visible(self, visible: bool) -> None: ...


class StringRenderer(Renderer):
    """Collects the plain text of the last frame. Useful in tests."""

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self.string = ""
        self.frames: list[str] = []
        self.cursor: tuple[int, int] | None = None

    def _pre_prompt(self) -> None:
        self.string = ""
        self.cursor = None

    def _post_prompt(self, rows: int) -> None:
        self.frames.append(self.string)

    def _emit(self, text: str, style: TextStyle | None) -> None:
        self.string += text

    def _place_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def _set_cursor_visible(self, visible: bool) -> None:
        pass
