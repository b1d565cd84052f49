"""Password input prompt."""

from __future__ import annotations

from dataclasses import InitVar, dataclass

from .text import LineEditPrompt, run_validator

MASK = "*"


@dataclass
class Password(LineEditPrompt[str]):
    """Text input that never echoes the typed value.

    With ``hidden`` the input shows nothing at all; otherwise each character
    is drawn as ``*``. The final line never reveals the answer.
    """

    message: str = "Password:"
    default: str | None = None
    hidden: bool = False
    initial: InitVar[str | None] = None

    _shows_answer = False

    def __post_init__(self, initial: str | None) -> None:
        if initial is not None:
            self.input.set_value(initial)

    def set_initial(self, value: str) -> Password:
        self.input.set_value(value)
        return self

    def effective_value(self) -> str:
        if not self.input.value and self.default is not None:
            return self.default
        return self.input.value

    def _check(self) -> str | None:
        return run_validator(self.validator, self.effective_value())

    def _display_text(self) -> str:
        return "" if self.hidden else MASK * len(self.input.value)

    def _display_col(self) -> int:
        return 0 if self.hidden else self.input.col

    def _value(self) -> str:
        return self.effective_value()
