"""Menu selection prompt.

Allows user to select one option from a paginated list using arrow keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, TypeVar

from ..errors import InvalidCount
from ..keys import Key, KeyEvent
from ..renderer import Renderer
from ..selection import (
    DEFAULT_ITEMS_PER_PAGE,
    Direction,
    SelectionCursor,
    SelectOption,
    to_options,
)
from ..style import Flags, Section
from .base import Prompt

T = TypeVar("T")

_MOVES = (
    (Key.UP, "kK", Direction.UP),
    (Key.DOWN, "jJ", Direction.DOWN),
    (Key.LEFT, "hH", Direction.LEFT),
    (Key.RIGHT, "lL", Direction.RIGHT),
)


def move_from_event(cursor: SelectionCursor, event: KeyEvent) -> None:
    """Apply every navigation key in ``event`` to ``cursor``."""
    for code in event.codes:
        for key, _, direction in _MOVES:
            if code is key:
                cursor.move(direction)
    for ch in event.chars:
        for _, letters, direction in _MOVES:
            if ch in letters:
                cursor.move(direction)


def is_navigation(event: KeyEvent) -> bool:
    return any(
        event.has(key) or event.has_char(*letters) for key, letters, _ in _MOVES
    )


def write_description(r: Renderer, option: SelectOption[Any], focused: bool) -> None:
    if not focused:
        return
    if option.disabled:
        r.write(" · (Disabled)")
    elif option.description:
        r.write(f" · {option.description}")


def write_page(r: Renderer, cursor: SelectionCursor) -> None:
    section = Section.page(cursor.page, cursor.page_count)
    r.begin(section)
    r.end(section)


@dataclass
class Select(Prompt[T]):
    """Pick one option.

    Navigate with arrows or h/j/k/l (left/right flip pages); Enter or
    Backspace submits the focused option unless it is disabled. ``loop``
    wraps the focus around the ends of the list.
    """

    message: str = "Select:"
    options: list[Any] = field(default_factory=list)
    selected: int = 0
    loop: bool = True
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    cursor: SelectionCursor = field(init=False)

    def __post_init__(self) -> None:
        self.options = to_options(self.options)
        self.cursor = SelectionCursor(
            total_items=len(self.options),
            focused=self.selected,
            items_per_page=self.items_per_page,
            wrap=self.loop,
        )

    @classmethod
    def of(cls, message: str, items: Iterable[T], **kwargs: Any) -> Select[T]:
        return cls(message=message, options=list(items), **kwargs)

    @property
    def focused_index(self) -> int:
        return self.cursor.focused

    @property
    def focused_option(self) -> SelectOption[T] | None:
        if not self.options:
            return None
        return self.options[self.cursor.focused]

    def in_loop(self, loop: bool) -> Select[T]:
        self.loop = loop
        self.cursor.wrap = loop
        return self

    def set_items_per_page(self, items_per_page: int) -> Select[T]:
        self.items_per_page = items_per_page
        self.cursor.set_items_per_page(items_per_page)
        return self

    def set_selected(self, index: int) -> Select[T]:
        self.cursor.focus(index)
        return self

    def _can_submit(self) -> bool:
        option = self.focused_option
        return option is not None and not option.disabled

    def _handle_key(self, event: KeyEvent) -> bool:
        move_from_event(self.cursor, event)
        if event.has(Key.ENTER, Key.BACKSPACE):
            return self._can_submit()
        return False

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return is_navigation(event) or event.has(Key.ENTER, Key.BACKSPACE)

    def _value(self) -> T:
        if not self._can_submit():
            raise InvalidCount(expected=1, actual=0)
        return self.options[self.cursor.focused].value

    def _write_answer(self, r: Renderer) -> None:
        option = self.focused_option
        r.write(option.title if option is not None else "")

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.query(False))
        r.write(self.message)
        r.end(Section.query(False))

        cursor = self.cursor
        page = self.options[cursor.page_start : cursor.page_end]
        for n, option in enumerate(page):
            focused = n == cursor.focused_within_page
            flags = Flags.NONE
            if focused:
                flags |= Flags.FOCUSED
            if option.disabled:
                flags |= Flags.DISABLED
            section = Section.option_exclusive(flags)
            r.begin(section)
            r.write(option.title)
            write_description(r, option, focused)
            r.end(section)

        write_page(r, cursor)
        return r.newline_count()
