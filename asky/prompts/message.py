"""Advisory message that waits for acknowledgement."""

from __future__ import annotations

from dataclasses import dataclass

from ..keys import KeyEvent
from ..renderer import Renderer
from ..style import Section
from .base import Prompt


@dataclass
class Message(Prompt[None]):
    """Shows ``message`` (and an optional call to action) until any key."""

    message: str = ""
    action: str | None = None

    @classmethod
    def with_action(cls, message: str, action: str) -> Message:
        return cls(message=message, action=action)

    def _handle_key(self, event: KeyEvent) -> bool:
        return not event.is_empty()

    def _value(self) -> None:
        return None

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.message())
        r.write(self.message)
        r.end(Section.message())
        if self.action:
            r.begin(Section.placeholder())
            r.write(self.action)
            r.end(Section.placeholder())
        return r.newline_count()

    def _draw_last(self, r: Renderer) -> int:
        r.begin(Section.message())
        r.write(self.message)
        r.end(Section.message())
        return r.newline_count()
