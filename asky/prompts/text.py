"""One-line text input prompt.

``LineEditPrompt`` holds the editing and validation behaviour shared by the
Text, Password and Number prompts.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import Any, Callable, TypeVar

from ..errors import ValidationFailed
from ..keys import Key, KeyEvent
from ..line_input import CursorMove, LineInput
from ..renderer import Renderer, cell_width
from ..style import Section
from .base import Prompt

T = TypeVar("T")

# Returns an error message to reject the input, or None to accept it.
Validator = Callable[[Any], "str | None"]

_EDIT_KEYS = (Key.ENTER, Key.BACKSPACE, Key.DELETE, Key.LEFT, Key.RIGHT)


def run_validator(validator: Validator | None, value: Any) -> str | None:
    """Call ``validator`` and normalise its verdict to an error or None."""
    if validator is None:
        return None
    try:
        error = validator(value)
    except ValidationFailed as exc:
        return exc.reason
    return None if error is None else str(error)


@dataclass
class LineEditPrompt(Prompt[T]):
    """Single-line editor with optional validation on Enter."""

    message: str = ""
    placeholder: str | None = None
    validator: Validator | None = None
    input: LineInput = field(default_factory=LineInput)
    validation_error: str | None = None

    hides_cursor = False

    def validate(self, validator: Validator) -> LineEditPrompt[T]:
        self.validator = validator
        return self

    def _insert(self, ch: str) -> None:
        self.input.insert(ch)

    def _handle_key(self, event: KeyEvent) -> bool:
        for ch in event.printable():
            self._insert(ch)

        for code in event.codes:
            if code is Key.BACKSPACE:
                self.input.backspace()
            elif code is Key.DELETE:
                self.input.delete()
            elif code is Key.LEFT:
                self.input.move_cursor(CursorMove.LEFT)
            elif code is Key.RIGHT:
                self.input.move_cursor(CursorMove.RIGHT)
            elif code is Key.ENTER:
                return self._validate_to_submit()
        return False

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return any(True for _ in event.printable()) or event.has(*_EDIT_KEYS)

    def _validate_to_submit(self) -> bool:
        self.validation_error = self._check()
        return self.validation_error is None

    def _check(self) -> str | None:
        return None

    def _display_text(self) -> str:
        return self.input.value

    def _empty_hint(self) -> str | None:
        return self.placeholder

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.query(False))
        r.write(self.message)
        r.end(Section.query(False))

        text = self._display_text()
        r.begin(Section.input())
        r.save_cursor()
        r.write(text)
        hint = self._empty_hint()
        if not self.input.value and hint:
            r.begin(Section.placeholder())
            r.write(hint)
            r.end(Section.placeholder())
        r.end(Section.input())

        if self.validation_error is not None:
            r.write("\n")
            r.begin(Section.validator(False))
            r.write(self.validation_error)
            r.end(Section.validator(False))

        r.set_cursor([cell_width(text[: self._display_col()]), 0])
        return r.newline_count()

    def _display_col(self) -> int:
        return self.input.col


@dataclass
class Text(LineEditPrompt[str]):
    """Free text input.

    An empty input submits ``default`` when one is set. The validator sees
    that effective value.
    """

    message: str = "Input:"
    default: str | None = None
    initial: InitVar[str | None] = None

    def __post_init__(self, initial: str | None) -> None:
        if initial is not None:
            self.input.set_value(initial)

    def set_initial(self, value: str) -> Text:
        self.input.set_value(value)
        return self

    def effective_value(self) -> str:
        if not self.input.value and self.default is not None:
            return self.default
        return self.input.value

    def _check(self) -> str | None:
        return run_validator(self.validator, self.effective_value())

    def _empty_hint(self) -> str | None:
        return self.placeholder if self.placeholder is not None else self.default

    def _value(self) -> str:
        return self.effective_value()
