"""Terminal backend: raw-mode key reading and ANSI drawing.

This module provides:
- ANSI: escape sequences used for cursor bookkeeping
- TermRenderer: Renderer that redraws a prompt in place on a text stream
- RawKeyReader: blocking key reader built on prompt_toolkit's input layer
- listen()/prompt(): the synchronous prompting loop

prompt_toolkit handles the terminal complexity:
- Terminal raw mode management
- Escape sequence parsing (distinguishes ESC from arrow keys)
"""

from __future__ import annotations

import logging
import select
import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Iterable, TextIO, TypeVar

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys
from rich.color import ColorSystem
from rich.style import Style as TextStyle

from .config import AskyConfig
from .errors import IoFailure
from .keys import Key, KeyEvent
from .prompts.base import Prompt
from .renderer import DrawTime, Renderer
from .style import Theme

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ANSI:
    """ANSI escape sequences."""

    ESC = "\x1b"
    CLEAR_DOWN = "\x1b[J"
    HIDE_CURSOR = "\x1b[?25l"
    SHOW_CURSOR = "\x1b[?25h"

    @staticmethod
    def up(n: int) -> str:
        return f"\x1b[{n}A" if n > 0 else ""

    @staticmethod
    def down(n: int) -> str:
        return f"\x1b[{n}B" if n > 0 else ""

    @staticmethod
    def right(n: int) -> str:
        return f"\x1b[{n}C" if n > 0 else ""


class TermRenderer(Renderer):
    """Draws prompts in place on a terminal stream.

    Every frame ends on a fresh line, so after a frame of N rows the cursor
    sits N rows below the prompt's first row. The next frame moves back up
    by however far the cursor currently is from that first row, clears to
    the end of the screen and redraws.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        theme: Theme | None = None,
        color: bool = True,
    ) -> None:
        super().__init__(theme)
        self.out = out if out is not None else sys.stdout
        self.color = color
        self._cursor_row = 0
        self._drawing = False
        self._pending_cursor: tuple[int, int] | None = None

    def _raw(self, data: str) -> None:
        if data:
            self.out.write(data)

    def _pre_prompt(self) -> None:
        self._drawing = True
        self._pending_cursor = None
        if self._draw_time is not DrawTime.FIRST:
            self._raw(ANSI.up(self._cursor_row) + "\r" + ANSI.CLEAR_DOWN)
        self._cursor_row = 0

    def _emit(self, text: str, style: TextStyle | None) -> None:
        if self.color and style is not None:
            segments = [
                style.render(part, color_system=ColorSystem.STANDARD) if part else ""
                for part in text.split("\n")
            ]
        else:
            segments = text.split("\n")
        # Raw mode may leave output post-processing off; return explicitly.
        self._raw("\r\n".join(segments))

    def _post_prompt(self, rows: int) -> None:
        self._drawing = False
        self._cursor_row = rows
        if self._pending_cursor is not None and self._draw_time is not DrawTime.LAST:
            self._move_to(*self._pending_cursor)
        self._pending_cursor = None
        self.out.flush()

    def _place_cursor(self, row: int, col: int) -> None:
        if self._drawing:
            self._pending_cursor = (row, col)
            return
        self._move_to(row, col)
        self.out.flush()

    def _move_to(self, row: int, col: int) -> None:
        delta = self._cursor_row - row
        seq = ANSI.up(delta) if delta > 0 else ANSI.down(-delta)
        self._raw(seq + "\r" + ANSI.right(col))
        self._cursor_row = row

    def _set_cursor_visible(self, visible: bool) -> None:
        self._raw(ANSI.SHOW_CURSOR if visible else ANSI.HIDE_CURSOR)
        self.out.flush()


# -- key input --

_NAMED_KEYS: dict[str, Key] = {
    Keys.ControlM: Key.ENTER,
    Keys.ControlJ: Key.ENTER,
    Keys.ControlH: Key.BACKSPACE,
    Keys.Delete: Key.DELETE,
    Keys.Left: Key.LEFT,
    Keys.Right: Key.RIGHT,
    Keys.Up: Key.UP,
    Keys.Down: Key.DOWN,
    Keys.Escape: Key.ESCAPE,
    Keys.ControlC: Key.INTERRUPT,
    Keys.ControlD: Key.INTERRUPT,
}


def translate_key_press(key_press: KeyPress) -> KeyEvent | None:
    """Convert a prompt_toolkit key press into a KeyEvent.

    Returns None for keys the prompts have no use for (function keys,
    unbound control chords, ...).
    """
    key = key_press.key
    if key == Keys.BracketedPaste:
        text = key_press.data.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
        chars = [ch for ch in text if ch.isprintable()]
        return KeyEvent(chars=chars) if chars else None
    if key in _NAMED_KEYS:
        return KeyEvent.key(_NAMED_KEYS[key])
    if isinstance(key, Keys):
        return None
    if len(key) == 1 and key.isprintable():
        return KeyEvent.char(key)
    return None


class KeyReader(ABC):
    """Blocking source of key events; a context manager around raw mode."""

    def __enter__(self) -> KeyReader:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass

    @abstractmethod
    def read_event(self) -> KeyEvent:
        """Block until the next key event arrives."""


class RawKeyReader(KeyReader):
    """Reads keys from the terminal in raw mode via prompt_toolkit.

    Raw mode is entered on ``__enter__`` and always restored on
    ``__exit__``, whatever the exit path.
    """

    def __init__(self, escape_timeout: float = 0.05, stdin: TextIO | None = None) -> None:
        self.escape_timeout = escape_timeout
        self._stdin = stdin
        self._input: Input | None = None
        self._raw_mode_ctx: Any = None
        self._pending: deque[KeyEvent] = deque()

    def __enter__(self) -> RawKeyReader:
        self._input = create_input(self._stdin)
        try:
            self._raw_mode_ctx = self._input.raw_mode()
            self._raw_mode_ctx.__enter__()
        except Exception:
            self._cleanup()
            raise
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up contexts in reverse order."""
        if self._raw_mode_ctx is not None:
            self._raw_mode_ctx.__exit__(None, None, None)
            self._raw_mode_ctx = None
        if self._input is not None:
            self._input.close()
            self._input = None
        self._pending.clear()

    def read_event(self) -> KeyEvent:
        while not self._pending:
            self._fill()
        return self._pending.popleft()

    def _fill(self) -> None:
        if self._input is None:
            raise IoFailure("key reader is not active")
        fd = self._input.fileno()
        select.select([fd], [], [])
        presses = self._input.read_keys()
        if not presses and self._input.closed:
            raise EOFError("input stream closed")
        if not presses:
            # A lone ESC stays buffered in the parser until we flush it.
            ready, _, _ = select.select([fd], [], [], self.escape_timeout)
            if not ready:
                presses = self._input.flush_keys()
        self._queue(presses)

    def _queue(self, presses: Iterable[KeyPress]) -> None:
        for key_press in presses:
            event = translate_key_press(key_press)
            if event is not None:
                self._pending.append(event)


class ScriptedKeyReader(KeyReader):
    """Replays a fixed sequence of key events (tests, non-interactive runs)."""

    def __init__(self, events: Iterable[KeyEvent]) -> None:
        self._events = deque(events)
        self.active = False

    def __enter__(self) -> ScriptedKeyReader:
        self.active = True
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.active = False

    def read_event(self) -> KeyEvent:
        if not self._events:
            raise EOFError("no more scripted key events")
        return self._events.popleft()


# -- prompting loop --


def listen(
    prompt: Prompt[Any],
    renderer: Renderer | None = None,
    reader: KeyReader | None = None,
    config: AskyConfig | None = None,
) -> None:
    """Drive ``prompt`` until it is submitted or cancelled.

    Raises:
        IoFailure: if reading keys or writing output fails. Raw mode has
            already been released when this propagates.
    """
    config = config or AskyConfig.from_env()
    if renderer is None:
        renderer = TermRenderer(theme=config.theme(), color=config.color)
    if reader is None:
        reader = RawKeyReader(escape_timeout=config.escape_timeout)

    name = type(prompt).__name__
    logger.debug("prompt started: %s", name)
    try:
        with reader:
            if prompt.hides_cursor:
                renderer.hide_cursor()
            try:
                prompt.draw(renderer)
                renderer.update_draw_time()
                while not prompt.done:
                    event = reader.read_event()
                    prompt.handle_key(event)
                    if not prompt.done:
                        prompt.draw(renderer)
                renderer.update_draw_time()
                prompt.draw(renderer)
            finally:
                if prompt.hides_cursor:
                    renderer.show_cursor()
    except (OSError, EOFError) as exc:
        logger.warning("prompt %s failed: %s", name, exc)
        raise IoFailure(str(exc)) from exc
    logger.debug("prompt finished: %s (%s)", name, prompt.state.value)


def prompt(
    prompt: Prompt[T],
    config: AskyConfig | None = None,
    renderer: Renderer | None = None,
    reader: KeyReader | None = None,
) -> T:
    """Run ``prompt`` on the terminal and return its value.

    Raises Cancel when the user aborts, unless ``config.exit_on_abort`` is
    set, in which case the process exits with status 1.
    """
    config = config or AskyConfig.from_env()
    listen(prompt, renderer=renderer, reader=reader, config=config)
    if prompt.cancelled and config.exit_on_abort:
        raise SystemExit(1)
    return prompt.value()
