"""Multiple-choice selection prompt."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, TypeVar

from ..errors import InvalidCount
from ..keys import Key, KeyEvent
from ..renderer import Renderer
from ..selection import DEFAULT_ITEMS_PER_PAGE, SelectionCursor, SelectOption, to_options
from ..style import Flags, Section
from .base import Prompt
from .select import is_navigation, move_from_event, write_description, write_page

T = TypeVar("T")


@dataclass
class MultiSelect(Prompt[list[T]]):
    """Pick any number of options.

    Space toggles the focused option (disabled options and options past
    ``max`` are left alone). Enter or Backspace submits once at least
    ``min`` options are selected; below that the prompt shows an inline
    error and keeps reading.
    """

    message: str = "Select:"
    options: list[Any] = field(default_factory=list)
    selected: Sequence[int] = ()
    min: int | None = None
    max: int | None = None
    loop: bool = True
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    cursor: SelectionCursor = field(init=False)
    selected_count: int = field(default=0, init=False)
    count_error: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.options = to_options(self.options)
        self.cursor = SelectionCursor(
            total_items=len(self.options),
            items_per_page=self.items_per_page,
            wrap=self.loop,
        )
        # Pre-active options go through the same max-bounded path as ``selected``.
        preset = [i for i, option in enumerate(self.options) if option.active]
        for i in preset:
            self.options[i].active = False
        self.selected_count = 0
        self.set_selected([*preset, *self.selected])

    @classmethod
    def of(cls, message: str, items: Iterable[T], **kwargs: Any) -> MultiSelect[T]:
        return cls(message=message, options=list(items), **kwargs)

    def set_selected(self, indices: Iterable[int]) -> MultiSelect[T]:
        for i in indices:
            if not 0 <= i < len(self.options):
                continue
            option = self.options[i]
            if option.active:
                continue
            if self.max is not None and self.selected_count >= self.max:
                break
            option.active = True
            self.selected_count += 1
        return self

    def in_loop(self, loop: bool) -> MultiSelect[T]:
        self.loop = loop
        self.cursor.wrap = loop
        return self

    def set_items_per_page(self, items_per_page: int) -> MultiSelect[T]:
        self.items_per_page = items_per_page
        self.cursor.set_items_per_page(items_per_page)
        return self

    def toggle_focused(self) -> None:
        if not self.options:
            return
        option: SelectOption[Any] = self.options[self.cursor.focused]
        if option.disabled:
            return
        if option.active:
            option.active = False
            self.selected_count -= 1
        elif self.max is None or self.selected_count < self.max:
            option.active = True
            self.selected_count += 1

    def _below_min(self) -> bool:
        return self.min is not None and self.selected_count < self.min

    def _handle_key(self, event: KeyEvent) -> bool:
        move_from_event(self.cursor, event)
        if event.has(Key.SPACE) or event.has_char(" "):
            self.toggle_focused()
            self.count_error = None

        if event.has(Key.ENTER, Key.BACKSPACE):
            if self._below_min():
                self.count_error = f"Select at least {self.min}"
                return False
            return True
        return False

    def _will_handle_key(self, event: KeyEvent) -> bool:
        return (
            is_navigation(event)
            or event.has(Key.SPACE, Key.ENTER, Key.BACKSPACE)
            or event.has_char(" ")
        )

    def _value(self) -> list[T]:
        if self._below_min():
            assert self.min is not None
            raise InvalidCount(expected=self.min, actual=self.selected_count)
        return [option.value for option in self.options if option.active]

    def _write_answer(self, r: Renderer) -> None:
        r.begin(Section.list())
        titles = [option.title for option in self.options if option.active]
        for i, title in enumerate(titles):
            item = Section.list_item(i == 0)
            r.begin(item)
            r.write(title)
            r.end(item)
        r.end(Section.list())

    def _limits_hint(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"Min: {self.min}")
        if self.max is not None:
            parts.append(f"Max: {self.max}")
        return " · ".join(parts)

    def _draw(self, r: Renderer) -> int:
        r.begin(Section.query(False))
        r.write(self.message)
        hint = self._limits_hint()
        if hint:
            r.write(" ")
            r.begin(Section.placeholder())
            r.write(hint)
            r.end(Section.placeholder())
        r.end(Section.query(False))

        cursor = self.cursor
        page = self.options[cursor.page_start : cursor.page_end]
        for n, option in enumerate(page):
            focused = n == cursor.focused_within_page
            flags = Flags.NONE
            if focused:
                flags |= Flags.FOCUSED
            if option.active:
                flags |= Flags.SELECTED
            if option.disabled:
                flags |= Flags.DISABLED
            section = Section.option(flags)
            r.begin(section)
            r.write(option.title)
            write_description(r, option, focused)
            r.end(section)

        if self.count_error is not None:
            r.begin(Section.validator(False))
            r.write(self.count_error)
            r.end(Section.validator(False))
            r.write("\n")

        write_page(r, cursor)
        return r.newline_count()
