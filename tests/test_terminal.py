"""Tests for the terminal backend in asky/terminal.py.

Covers:
- In-place redraw bookkeeping (move up, clear down, cursor placement)
- Cursor hide/show around cursorless prompts
- Cancellation, exit_on_abort and I/O failure handling
- Color emission through rich styles
"""

from __future__ import annotations

import io

import pytest

from asky.config import AskyConfig
from asky.errors import Cancel, IoFailure
from asky.keys import Key, KeyEvent
from asky.prompts import Confirm, Select, Text
from asky.style import DefaultTheme
from asky.terminal import ANSI, ScriptedKeyReader, TermRenderer, listen, prompt

CONFIG = AskyConfig(color=False)


def make_renderer(out: io.StringIO, color: bool = False) -> TermRenderer:
    return TermRenderer(out=out, theme=DefaultTheme(ascii=True), color=color)


class BrokenStream(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError("terminal went away")


class TestANSI:
    """Tests for the ANSI helpers."""

    def test_zero_moves_are_empty(self) -> None:
        """A zero-count CSI would still move one cell on most terminals."""
        assert ANSI.up(0) == ""
        assert ANSI.down(0) == ""
        assert ANSI.right(0) == ""

    def test_moves(self) -> None:
        assert ANSI.up(2) == "\x1b[2A"
        assert ANSI.down(1) == "\x1b[1B"
        assert ANSI.right(3) == "\x1b[3C"


class TestPromptLoop:
    """Tests for prompt() / listen() with a scripted reader."""

    def test_confirm_final_line_replaces_prompt(self) -> None:
        out = io.StringIO()
        reader = ScriptedKeyReader([KeyEvent.char("y")])
        result = prompt(Confirm(message="Sure?"), config=CONFIG, renderer=make_renderer(out), reader=reader)

        assert result is True
        text = out.getvalue()
        assert text.startswith(ANSI.HIDE_CURSOR + "[ ] Sure?\r\n No    Yes   \r\n")
        # The Last frame moves back over the two rows of the First frame.
        assert text.endswith("\x1b[2A\r\x1b[J[x] Sure? Yes\r\n" + ANSI.SHOW_CURSOR)

    def test_update_frames_clear_previous_extent(self) -> None:
        out = io.StringIO()
        reader = ScriptedKeyReader([KeyEvent.key(Key.DOWN), KeyEvent.key(Key.ENTER)])
        result = prompt(
            Select(message="Pick", options=["a", "b"]),
            config=CONFIG,
            renderer=make_renderer(out),
            reader=reader,
        )
        assert result == "b"
        frames = out.getvalue().split("\x1b[3A\r\x1b[J")
        # First frame, one Update frame, then the Last frame.
        assert len(frames) == 3
        assert "(x) b" in frames[1]
        assert frames[2].startswith("[x] Pick b\r\n")

    def test_text_cursor_is_placed_in_input(self) -> None:
        """After each frame the cursor returns to the typed position."""
        out = io.StringIO()
        reader = ScriptedKeyReader(
            [KeyEvent.char("a"), KeyEvent.char("b"), KeyEvent.key(Key.ENTER)]
        )
        result = prompt(Text(message="Name:"), config=CONFIG, renderer=make_renderer(out), reader=reader)

        assert result == "ab"
        text = out.getvalue()
        assert ANSI.HIDE_CURSOR not in text
        # First frame: 2 rows drawn, input starts at row 1 col 2.
        assert "[ ] Name:\r\n> \r\n\x1b[1A\r\x1b[2C" in text
        # Update frames start from the input row, one row below the top.
        assert "\x1b[1A\r\x1b[J[ ] Name:\r\n> ab\r\n\x1b[1A\r\x1b[4C" in text
        assert text.endswith("[x] Name: ab\r\n")

    def test_escape_raises_cancel(self) -> None:
        out = io.StringIO()
        reader = ScriptedKeyReader([KeyEvent.key(Key.ESCAPE)])
        with pytest.raises(Cancel):
            prompt(Confirm(message="Sure?"), config=CONFIG, renderer=make_renderer(out), reader=reader)
        assert "[x] Sure? ...\r\n" in out.getvalue()
        assert out.getvalue().endswith(ANSI.SHOW_CURSOR)

    def test_exit_on_abort(self) -> None:
        out = io.StringIO()
        reader = ScriptedKeyReader([KeyEvent.key(Key.INTERRUPT)])
        config = AskyConfig(color=False, exit_on_abort=True)
        with pytest.raises(SystemExit) as exc_info:
            prompt(Confirm(), config=config, renderer=make_renderer(out), reader=reader)
        assert exc_info.value.code == 1

    def test_exhausted_input_is_io_failure(self) -> None:
        """Reader errors surface as IoFailure after the reader is released."""
        out = io.StringIO()
        reader = ScriptedKeyReader([KeyEvent.char("x")])
        with pytest.raises(IoFailure):
            listen(Text(), renderer=make_renderer(out), reader=reader, config=CONFIG)
        assert reader.active is False

    def test_write_error_is_io_failure(self) -> None:
        reader = ScriptedKeyReader([KeyEvent.key(Key.ENTER)])
        renderer = TermRenderer(out=BrokenStream(), color=False)
        with pytest.raises(IoFailure) as exc_info:
            listen(Confirm(), renderer=renderer, reader=reader, config=CONFIG)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert reader.active is False


class TestTermRendererColor:
    """Tests for styled output."""

    def test_color_emits_sgr(self) -> None:
        out = io.StringIO()
        Confirm(message="Sure?").draw(make_renderer(out, color=True))
        assert "\x1b[34m[ ]\x1b[0m" in out.getvalue()

    def test_no_color_is_plain(self) -> None:
        out = io.StringIO()
        Confirm(message="Sure?").draw(make_renderer(out))
        assert "\x1b[3" not in out.getvalue()
