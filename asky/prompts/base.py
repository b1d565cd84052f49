"""Base class for prompts.

This module provides the core abstraction shared by every prompt kind:
- PromptState: Active -> Submitted | Cancelled
- Prompt: handle_key / will_handle_key / draw / value
- Formatter: optional per-prompt drawing callback set with Prompt.format()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from ..errors import Cancel
from ..keys import KeyEvent
from ..renderer import DrawTime, Renderer
from ..style import Section

if TYPE_CHECKING:
    from ..config import AskyConfig

T = TypeVar("T")
P = TypeVar("P", bound="Prompt[Any]")

# (prompt, draw time, renderer) -> rows drawn
Formatter = Callable[[Any, DrawTime, Renderer], int]


class PromptState(Enum):
    ACTIVE = "active"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


class Prompt(ABC, Generic[T]):
    """An interactive widget that collects a single value.

    Lifecycle:
        1. draw() with DrawTime.FIRST
        2. handle_key() for every key event, draw() with DrawTime.UPDATE
        3. once submitted or cancelled, a final draw() with DrawTime.LAST
        4. value() -> the answer, or raises Cancel / InvalidValue / ...

    ``handle_key`` returns True exactly once, on submission. Abort keys move
    the prompt to CANCELLED instead. Keys arriving after either are ignored.
    """

    message: str
    hides_cursor: bool = True
    _shows_answer: bool = True
    _state: PromptState = PromptState.ACTIVE
    formatter: Formatter | None = None

    @property
    def state(self) -> PromptState:
        return self._state

    @property
    def submitted(self) -> bool:
        return self._state is PromptState.SUBMITTED

    @property
    def cancelled(self) -> bool:
        return self._state is PromptState.CANCELLED

    @property
    def done(self) -> bool:
        return self._state is not PromptState.ACTIVE

    def handle_key(self, event: KeyEvent) -> bool:
        """Process one key event. Returns True if the prompt just submitted."""
        if self.done:
            return False
        if event.is_abort():
            self.cancel()
            return False
        if self._handle_key(event):
            self._state = PromptState.SUBMITTED
            return True
        return False

    def will_handle_key(self, event: KeyEvent) -> bool:
        """Whether ``handle_key`` would consume anything in ``event``."""
        if self.done:
            return False
        return event.is_abort() or self._will_handle_key(event)

    def cancel(self) -> None:
        if not self.done:
            self._state = PromptState.CANCELLED

    def format(self: P, formatter: Formatter) -> P:
        """Replace the built-in drawing with ``formatter``.

        The formatter is called for every phase (First, Update and Last) as
        ``formatter(prompt, draw_time, renderer)`` and returns the number of
        rows it drew, usually ``renderer.newline_count()``. It owns the whole
        presentation, including the cursor.

        Example:
            def one_line(prompt, draw_time, r):
                r.write(f"{prompt.message} {'Y' if prompt.active else 'N'}")
                return r.newline_count()

            Confirm(message="Sure?").format(one_line)
        """
        self.formatter = formatter
        return self

    def draw(self, renderer: Renderer) -> int:
        formatter = self.formatter
        if formatter is not None:
            return renderer.print_prompt(lambda r: formatter(self, r.draw_time(), r))
        if renderer.draw_time() is DrawTime.LAST:
            return renderer.print_prompt(self._draw_last)
        return renderer.print_prompt(self._draw)

    def value(self) -> T:
        if self.cancelled:
            raise Cancel()
        return self._value()

    def prompt(self, config: AskyConfig | None = None) -> T:
        """Run this prompt on the terminal and return the answer."""
        from ..terminal import prompt

        return prompt(self, config=config)

    # -- subclass hooks --

    @abstractmethod
    def _handle_key(self, event: KeyEvent) -> bool: ...

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return True

    @abstractmethod
    def _draw(self, r: Renderer) -> int: ...

    @abstractmethod
    def _value(self) -> T: ...

    def _write_answer(self, r: Renderer) -> None:
        r.write(str(self._value()))

    def _draw_last(self, r: Renderer) -> int:
        """Compact final line: the question followed by the answer."""
        r.begin(Section.query(True))
        r.write(self.message)
        r.end(Section.query(True))

        show = self._shows_answer and not self.cancelled
        r.begin(Section.answer(show))
        if show:
            self._write_answer(r)
        r.end(Section.answer(show))
        return r.newline_count()
