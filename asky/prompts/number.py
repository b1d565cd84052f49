"""Numeric input prompt."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from functools import partial
from typing import Callable

from ..errors import InvalidValue
from ..numeric import INT, NumKind, num_kind
from ..renderer import Renderer
from .text import LineEditPrompt, run_validator

# (raw text, parsed number or the parse error) -> error message or None
InputValidator = Callable[[str, "int | float | InvalidValue"], "str | None"]


@dataclass
class Number(LineEditPrompt[int | float]):
    """Text input restricted to the characters of a numeric kind.

    Admission rules on top of plain text editing:
    - ``+``/``-`` only at column 0, only for signed kinds, only once
    - ``.`` only for float kinds, only once
    - anything else must be an ASCII digit

    The validator receives the parsed number and only runs when parsing
    succeeds; a parse failure surfaces from ``value()`` as InvalidValue.
    ``input_validator`` runs first on every Enter with the raw text and
    the parse result (the number, or the InvalidValue it raised), so it
    can reject unparseable input inline.
    """

    message: str = "Number:"
    kind: NumKind | str | type = field(default=INT)
    default: int | float | None = None
    input_validator: InputValidator | None = None
    initial: InitVar[int | float | None] = None

    def __post_init__(self, initial: int | float | None) -> None:
        self.kind = num_kind(self.kind)
        if initial is not None:
            self.set_initial(initial)

    @property
    def num_kind(self) -> NumKind:
        assert isinstance(self.kind, NumKind)
        return self.kind

    def set_initial(self, value: int | float) -> Number:
        self.input.set_value(self.num_kind.format(value))
        return self

    def _insert(self, ch: str) -> None:
        kind = self.num_kind
        text = self.input.value
        if self.input.col == 0 and text[:1] in ("+", "-"):
            # Nothing may go in front of the sign.
            allowed = False
        elif ch in "+-":
            allowed = kind.signed and self.input.col == 0
        elif ch == ".":
            allowed = kind.is_float and "." not in text
        else:
            allowed = ch in "0123456789"
        if allowed:
            self.input.insert(ch)

    def validate_input(self, validator: InputValidator) -> Number:
        self.input_validator = validator
        return self

    def _check(self) -> str | None:
        try:
            parsed: int | float | InvalidValue = self._value()
        except InvalidValue as exc:
            parsed = exc
        if self.input_validator is not None:
            error = run_validator(partial(self.input_validator, self.input.value), parsed)
            if error is not None:
                return error
        if isinstance(parsed, InvalidValue):
            return None
        return run_validator(self.validator, parsed)

    def _empty_hint(self) -> str | None:
        if self.placeholder is not None:
            return self.placeholder
        return None if self.default is None else self.num_kind.format(self.default)

    def _value(self) -> int | float:
        if not self.input.value:
            if self.default is None:
                raise InvalidValue("", self.num_kind.name)
            return self.default
        return self.num_kind.parse(self.input.value)

    def _write_answer(self, r: Renderer) -> None:
        try:
            r.write(self.num_kind.format(self._value()))
        except InvalidValue:
            r.write(self.input.value)
