"""Tests for the single-line editor in asky/line_input.py.

Covers:
- Insert / backspace / delete at the cursor
- Cursor clamping at both ends
- set_value placing the cursor at the end
"""

from __future__ import annotations

from asky.line_input import CursorMove, LineInput


class TestLineInputEditing:
    """Tests for insert, backspace and delete."""

    def test_insert_advances_cursor(self) -> None:
        """Characters are inserted at col and col moves past them."""
        line = LineInput()
        for ch in "abc":
            line.insert(ch)
        assert line.value == "abc"
        assert line.col == 3

    def test_insert_in_the_middle(self) -> None:
        """Inserting after moving left splits the existing text."""
        line = LineInput()
        line.set_value("ac")
        line.move_cursor(CursorMove.LEFT)
        line.insert("b")
        assert line.value == "abc"
        assert line.col == 2

    def test_backspace_removes_before_cursor(self) -> None:
        line = LineInput()
        line.set_value("abc")
        line.move_cursor(CursorMove.LEFT)
        line.backspace()
        assert line.value == "ac"
        assert line.col == 1

    def test_backspace_at_start_is_noop(self) -> None:
        """Backspace at col 0 leaves the buffer untouched."""
        line = LineInput()
        line.set_value("abc")
        for _ in range(3):
            line.move_cursor(CursorMove.LEFT)
        line.backspace()
        assert line.value == "abc"
        assert line.col == 0

    def test_backspace_on_empty_is_noop(self) -> None:
        line = LineInput()
        line.backspace()
        assert line.value == ""
        assert line.col == 0

    def test_delete_removes_at_cursor(self) -> None:
        line = LineInput()
        line.set_value("abc")
        line.move_cursor(CursorMove.LEFT)
        line.move_cursor(CursorMove.LEFT)
        line.delete()
        assert line.value == "ac"
        assert line.col == 1

    def test_delete_at_end_is_noop(self) -> None:
        """Delete at col == len leaves the buffer untouched."""
        line = LineInput()
        line.set_value("abc")
        line.delete()
        assert line.value == "abc"
        assert line.col == 3


class TestLineInputCursor:
    """Tests for cursor movement and the col <= len invariant."""

    def test_right_at_end_is_noop(self) -> None:
        line = LineInput()
        line.set_value("ab")
        line.move_cursor(CursorMove.RIGHT)
        assert line.col == 2

    def test_left_at_start_is_noop(self) -> None:
        line = LineInput()
        line.move_cursor(CursorMove.LEFT)
        assert line.col == 0

    def test_set_value_round_trip(self) -> None:
        """set_value(s) reads back s with the cursor at len(s)."""
        line = LineInput()
        line.set_value("hello")
        assert line.value == "hello"
        assert line.col == 5

    def test_col_never_exceeds_length(self) -> None:
        """A mixed edit sequence keeps 0 <= col <= len(value) throughout."""
        line = LineInput()
        ops = [
            lambda: line.insert("x"),
            lambda: line.move_cursor(CursorMove.LEFT),
            line.backspace,
            lambda: line.move_cursor(CursorMove.RIGHT),
            line.delete,
            lambda: line.insert("y"),
            lambda: line.insert("z"),
            lambda: line.move_cursor(CursorMove.LEFT),
            lambda: line.move_cursor(CursorMove.LEFT),
            lambda: line.move_cursor(CursorMove.LEFT),
            line.delete,
            line.backspace,
        ]
        for _ in range(3):
            for op in ops:
                op()
                assert 0 <= line.col <= len(line.value)
