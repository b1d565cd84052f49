"""Paginated focus cursor and option model for list prompts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Iterable, TypeVar

T = TypeVar("T")

DEFAULT_ITEMS_PER_PAGE = 10


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class SelectOption(Generic[T]):
    """An entry in a Select or MultiSelect prompt.

    ``title`` defaults to ``str(value)``. ``active`` marks the option as
    selected in a MultiSelect.
    """

    value: T
    title: str = ""
    description: str | None = None
    disabled: bool = False
    active: bool = False

    def __post_init__(self) -> None:
        if not self.title:
            self.title = str(self.value)


def to_options(items: Iterable[Any]) -> list[SelectOption[Any]]:
    """Wrap plain values as options; SelectOption instances are copied."""
    return [
        replace(item) if isinstance(item, SelectOption) else SelectOption(item)
        for item in items
    ]


@dataclass
class SelectionCursor:
    """Focused index over ``total_items`` split into pages.

    With ``wrap`` set, moving past either end continues from the other end;
    otherwise moves saturate at the first/last item.
    """

    total_items: int = 0
    focused: int = 0
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    wrap: bool = True
    _requested_per_page: int = field(default=DEFAULT_ITEMS_PER_PAGE, init=False, repr=False)

    def __post_init__(self) -> None:
        self.set_items_per_page(self.items_per_page)
        self.focus(self.focused)

    # -- configuration --

    def set_items_per_page(self, items_per_page: int) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be positive")
        self._requested_per_page = items_per_page
        self.items_per_page = max(1, min(items_per_page, self.total_items))

    def set_total(self, total_items: int) -> None:
        self.total_items = total_items
        self.set_items_per_page(self._requested_per_page)
        self.focus(self.focused)

    def focus(self, index: int) -> None:
        self.focused = max(0, min(index, self.total_items - 1))

    # -- pagination --

    @property
    def page(self) -> int:
        return self.focused // self.items_per_page

    @property
    def page_count(self) -> int:
        pages, rem = divmod(self.total_items, self.items_per_page)
        return max(1, pages + (1 if rem else 0))

    @property
    def page_start(self) -> int:
        return self.page * self.items_per_page

    @property
    def page_end(self) -> int:
        return min(self.page_start + self.items_per_page, self.total_items)

    @property
    def focused_within_page(self) -> int:
        return self.focused - self.page_start

    # -- movement --

    def move(self, direction: Direction) -> None:
        if self.total_items == 0:
            return
        if direction is Direction.UP:
            self._prev_item()
        elif direction is Direction.DOWN:
            self._next_item()
        elif direction is Direction.LEFT:
            self._prev_page()
        else:
            self._next_page()

    def _prev_item(self) -> None:
        last = self.total_items - 1
        if self.focused > 0:
            self.focused -= 1
        elif self.wrap:
            self.focused = last

    def _next_item(self) -> None:
        last = self.total_items - 1
        if self.focused < last:
            self.focused += 1
        elif self.wrap:
            self.focused = 0

    def _prev_page(self) -> None:
        target = self.focused - self.items_per_page
        if target >= 0:
            self.focused = target
        elif self.wrap and self.page_count > 1:
            # Same row on the last page, clamped to the last item.
            last_start = (self.page_count - 1) * self.items_per_page
            self.focused = min(last_start + self.focused_within_page, self.total_items - 1)
        else:
            self.focused = 0

    def _next_page(self) -> None:
        last = self.total_items - 1
        target = self.focused + self.items_per_page
        if target <= last:
            self.focused = target
        elif self.wrap and self.page != self.page_count - 1:
            # Last page is short; land on its final item.
            self.focused = last
        elif self.wrap and self.page_count > 1:
            self.focused = self.focused_within_page
        else:
            self.focused = last
