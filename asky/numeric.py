"""Numeric kinds accepted by the Number prompt.

A kind tells the prompt which characters may be typed (sign, decimal point)
and how to parse the final text.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidValue


@dataclass(frozen=True)
class NumKind:
    """Static classification of a numeric type."""

    name: str
    signed: bool = False
    is_float: bool = False
    bits: int | None = None  # None means unbounded

    @property
    def min_value(self) -> int | None:
        if self.bits is None or self.is_float:
            return None
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int | None:
        if self.bits is None or self.is_float:
            return None
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def parse(self, text: str) -> int | float:
        """Parse ``text`` into a number of this kind.

        Raises:
            InvalidValue: if the text is not a number or is out of range.
        """
        try:
            number: int | float = float(text) if self.is_float else int(text, 10)
        except ValueError as exc:
            raise InvalidValue(text, self.name) from exc

        low, high = self.min_value, self.max_value
        if low is not None and number < low:
            raise InvalidValue(text, self.name)
        if high is not None and number > high:
            raise InvalidValue(text, self.name)
        return number

    def format(self, number: int | float) -> str:
        return str(number)


U8 = NumKind("u8", bits=8)
U16 = NumKind("u16", bits=16)
U32 = NumKind("u32", bits=32)
U64 = NumKind("u64", bits=64)
U128 = NumKind("u128", bits=128)
USIZE = NumKind("usize", bits=64)
I8 = NumKind("i8", signed=True, bits=8)
I16 = NumKind("i16", signed=True, bits=16)
I32 = NumKind("i32", signed=True, bits=32)
I64 = NumKind("i64", signed=True, bits=64)
I128 = NumKind("i128", signed=True, bits=128)
ISIZE = NumKind("isize", signed=True, bits=64)
F32 = NumKind("f32", signed=True, is_float=True, bits=32)
F64 = NumKind("f64", signed=True, is_float=True, bits=64)
INT = NumKind("int", signed=True)
FLOAT = NumKind("float", signed=True, is_float=True)

KINDS: dict[str, NumKind] = {
    kind.name: kind
    for kind in (
        U8, U16, U32, U64, U128, USIZE,
        I8, I16, I32, I64, I128, ISIZE,
        F32, F64, INT, FLOAT,
    )
}


def num_kind(kind: NumKind | str | type) -> NumKind:
    """Resolve a kind given as a NumKind, a name like ``"u8"``, or ``int``/``float``."""
    if isinstance(kind, NumKind):
        return kind
    if kind is int:
        return INT
    if kind is float:
        return FLOAT
    if isinstance(kind, str) and kind in KINDS:
        return KINDS[kind]
    raise ValueError(f"unknown numeric kind: {kind!r}")
