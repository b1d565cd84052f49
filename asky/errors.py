"""Error kinds raised by prompts and backends."""

from __future__ import annotations


class AskyError(Exception):
    """Base class for all prompt errors."""


class Cancel(AskyError):
    """The user aborted the prompt (Escape, Ctrl+C, or a host abort)."""

    def __init__(self, message: str = "prompt cancelled") -> None:
        super().__init__(message)


class InvalidValue(AskyError):
    """The typed text could not be parsed into the requested value."""

    def __init__(self, text: str = "", kind: str | None = None) -> None:
        self.text = text
        self.kind = kind
        detail = f" as {kind}" if kind else ""
        super().__init__(f"invalid value {text!r}{detail}")


class ValidationFailed(AskyError):
    """A user validator rejected the input.

    Validators may raise this instead of returning an error string. Prompts
    catch it, store ``reason`` and keep reading input.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class IoFailure(AskyError):
    """Reading keys or writing to the terminal failed."""


class InvalidCount(AskyError):
    """Fewer options are selected than the prompt requires."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected at least {expected} selected, got {actual}")
