"""Yes/No confirmation prompt.

Used for permission prompts, confirmations, etc.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..keys import Key, KeyEvent
from ..renderer import Renderer
from ..style import Section
from .base import Prompt

CONFIRM_LABELS = ("No", "Yes")


@dataclass
class Confirm(Prompt[bool]):
    """Yes/No question.

    | Key                  | Action                       |
    | -------------------- | ---------------------------- |
    | `Enter`, `Backspace` | Submit current/initial value |
    | `y`, `Y`             | Submit `True`                |
    | `n`, `N`             | Submit `False`               |
    | `Left`, `h`, `H`     | Focus `False`                |
    | `Right`, `l`, `L`    | Focus `True`                 |
    """

    message: str = "Confirm?"
    active: bool = False

    def initial(self, active: bool) -> Confirm:
        self.active = active
        return self

    def _handle_key(self, event: KeyEvent) -> bool:
        for ch in event.chars:
            lower = ch.lower()
            if lower == "y":
                self.active = True
                return True
            if lower == "n":
                self.active = False
                return True
            if lower == "h":
                self.active = False
            elif lower == "l":
                self.active = True

        if event.has(Key.LEFT):
            self.active = False
        if event.has(Key.RIGHT):
            self.active = True
        return event.has(Key.ENTER, Key.BACKSPACE)

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return event.has_char(*"yYnNhHlL") or event.has(
            Key.LEFT, Key.RIGHT, Key.ENTER, Key.BACKSPACE
        )

    def _value(self) -> bool:
        return self.active

    def _write_answer(self, r: Renderer) -> None:
        r.write(CONFIRM_LABELS[self.active])

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.query(False))
        r.write(self.message)
        r.end(Section.query(False))

        for i, label in enumerate(CONFIRM_LABELS):
            selected = self.active == bool(i)
            r.begin(Section.toggle(selected))
            r.write(label)
            r.end(Section.toggle(selected))
        return r.newline_count()
