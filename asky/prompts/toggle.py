"""Two-option toggle prompt."""

from __future__ import annotations

from dataclasses import dataclass

from ..keys import Key, KeyEvent
from ..renderer import Renderer
from ..style import Section
from .base import Prompt


@dataclass
class Toggle(Prompt[str]):
    """Choose between two labels.

    `Left`/`h` focuses the first option, `Right`/`l` the second;
    `Enter`/`Backspace` submits the focused label.
    """

    message: str = "Choose:"
    options: tuple[str, str] = ("No", "Yes")
    active: bool = False

    def __post_init__(self) -> None:
        if len(self.options) != 2:
            raise ValueError("Toggle needs exactly two options")
        self.options = (self.options[0], self.options[1])

    def initial(self, active: bool) -> Toggle:
        self.active = active
        return self

    def _handle_key(self, event: KeyEvent) -> bool:
        if event.has(Key.LEFT) or event.has_char("h", "H"):
            self.active = False
        if event.has(Key.RIGHT) or event.has_char("l", "L"):
            self.active = True
        return event.has(Key.ENTER, Key.BACKSPACE)

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return event.has_char(*"hHlL") or event.has(
            Key.LEFT, Key.RIGHT, Key.ENTER, Key.BACKSPACE
        )

    def _value(self) -> str:
        return self.options[self.active]

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.query(False))
        r.write(self.message)
        r.end(Section.query(False))

        for i, label in enumerate(self.options):
            selected = self.active == bool(i)
            r.begin(Section.toggle(selected))
            r.write(label)
            r.end(Section.toggle(selected))
        return r.newline_count()
