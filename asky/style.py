"""Semantic style regions and the themes that decorate them.

Prompts never emit colors directly. They wrap their content in
``renderer.begin(section)`` / ``renderer.end(section)`` and the renderer's
theme decides what each region looks like.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING

from rich.style import Style as TextStyle

if TYPE_CHECKING:
    from .renderer import Renderer


class Flags(Flag):
    NONE = 0
    FOCUSED = auto()
    SELECTED = auto()
    DISABLED = auto()


class Region(str, Enum):
    """Stable region identifiers for downstream themes."""

    QUERY = "query"
    ANSWER = "answer"
    TOGGLE = "toggle"
    OPTION = "option"
    OPTION_EXCLUSIVE = "option_exclusive"
    LIST = "list"
    LIST_ITEM = "list_item"
    VALIDATOR = "validator"
    PLACEHOLDER = "placeholder"
    INPUT = "input"
    PAGE = "page"
    MESSAGE = "message"


@dataclass(frozen=True)
class Section:
    """A region plus its parameters.

    ``on`` carries the boolean parameter of the region: answered (Query),
    show (Answer), selected (Toggle), first (ListItem) or valid (Validator).
    """

    region: Region
    on: bool = False
    flags: Flags = Flags.NONE
    index: int = 0
    count: int = 1

    @classmethod
    def query(cls, answered: bool) -> Section:
        return cls(Region.QUERY, on=answered)

    @classmethod
    def answer(cls, show: bool) -> Section:
        return cls(Region.ANSWER, on=show)

    @classmethod
    def toggle(cls, selected: bool) -> Section:
        return cls(Region.TOGGLE, on=selected)

    @classmethod
    def option(cls, flags: Flags) -> Section:
        return cls(Region.OPTION, flags=flags)

    @classmethod
    def option_exclusive(cls, flags: Flags) -> Section:
        return cls(Region.OPTION_EXCLUSIVE, flags=flags)

    @classmethod
    def list(cls) -> Section:
        return cls(Region.LIST)

    @classmethod
    def list_item(cls, first: bool) -> Section:
        return cls(Region.LIST_ITEM, on=first)

    @classmethod
    def validator(cls, valid: bool) -> Section:
        return cls(Region.VALIDATOR, on=valid)

    @classmethod
    def placeholder(cls) -> Section:
        return cls(Region.PLACEHOLDER)

    @classmethod
    def input(cls) -> Section:
        return cls(Region.INPUT)

    @classmethod
    def page(cls, index: int, count: int) -> Section:
        return cls(Region.PAGE, index=index, count=count)

    @classmethod
    def message(cls) -> Section:
        return cls(Region.MESSAGE)


class Theme(ABC):
    """Decorates regions by writing to the renderer."""

    @abstractmethod
    def begin(self, renderer: Renderer, section: Section) -> None: ...

    @abstractmethod
    def end(self, renderer: Renderer, section: Section) -> None: ...


class PlainTheme(Theme):
    """No decoration at all; only the prompt's own text is emitted."""

    def begin(self, renderer: Renderer, section: Section) -> None:
        pass

    def end(self, renderer: Renderer, section: Section) -> None:
        pass


BLUE = TextStyle(color="blue")
GREEN = TextStyle(color="green")
RED = TextStyle(color="red")
MAGENTA = TextStyle(color="magenta")
DIM = TextStyle(color="bright_black")
DISABLED = TextStyle(color="bright_black", strike=True)
TOGGLE_ON = TextStyle(color="black", bgcolor="blue")
TOGGLE_OFF = TextStyle(color="white", bgcolor="bright_black")


@dataclass
class DefaultTheme(Theme):
    """The stock look: markers, colored options, dotted pagination."""

    ascii: bool = False

    def _glyph(self, ascii: str, fancy: str) -> str:
        return ascii if self.ascii else fancy

    def begin(self, renderer: Renderer, section: Section) -> None:
        region = section.region
        if region is Region.QUERY:
            if section.on:
                renderer.write(self._glyph("[x]", "■"), style=GREEN)
            else:
                renderer.write(self._glyph("[ ]", "▣"), style=BLUE)
            renderer.write(" ")
        elif region is Region.ANSWER:
            renderer.set_style(MAGENTA)
            if not section.on:
                renderer.write(self._glyph("...", "…"))
        elif region is Region.TOGGLE:
            renderer.set_style(TOGGLE_ON if section.on else TOGGLE_OFF)
            renderer.write(" ")
        elif region is Region.OPTION_EXCLUSIVE:
            self._begin_exclusive(renderer, section.flags)
        elif region is Region.OPTION:
            self._begin_option(renderer, section.flags)
        elif region is Region.VALIDATOR:
            renderer.set_style(BLUE if section.on else RED)
        elif region is Region.PLACEHOLDER:
            renderer.set_style(DIM)
        elif region is Region.INPUT:
            renderer.write(self._glyph(">", "›"), style=BLUE)
            renderer.write(" ")
        elif region is Region.LIST:
            renderer.write("[")
        elif region is Region.LIST_ITEM:
            if not section.on:
                renderer.write(", ")
        elif region is Region.PAGE:
            self._write_page(renderer, section.index, section.count)

    def end(self, renderer: Renderer, section: Section) -> None:
        region = section.region
        if region is Region.QUERY:
            renderer.write(" " if section.on else "\n")
        elif region is Region.ANSWER:
            renderer.set_style(None)
            renderer.write("\n")
        elif region is Region.TOGGLE:
            renderer.write(" ")
            renderer.set_style(None)
            renderer.write("  ")
        elif region in (Region.OPTION, Region.OPTION_EXCLUSIVE):
            renderer.set_style(None)
            renderer.write("\n")
        elif region is Region.LIST:
            renderer.write("]")
        elif region is Region.MESSAGE:
            renderer.write("\n")
        elif region is not Region.LIST_ITEM:
            renderer.set_style(None)

    def _begin_exclusive(self, renderer: Renderer, flags: Flags) -> None:
        focused = Flags.FOCUSED in flags
        disabled = Flags.DISABLED in flags
        if not focused:
            renderer.write(self._glyph("( )", "○"), style=DIM)
        elif disabled:
            renderer.write(self._glyph("( )", "○"), style=RED)
        else:
            renderer.write(self._glyph("(x)", "●"), style=BLUE)
        renderer.write(" ")
        self._title_style(renderer, focused, disabled)

    def _begin_option(self, renderer: Renderer, flags: Flags) -> None:
        focused = Flags.FOCUSED in flags
        selected = Flags.SELECTED in flags
        disabled = Flags.DISABLED in flags
        if selected and focused:
            marker = self._glyph("(o)", "◉")
        elif selected:
            marker = self._glyph("(x)", "●")
        else:
            marker = self._glyph("( )", "○")

        if focused:
            marker_style: TextStyle | None = RED if disabled else BLUE
        else:
            marker_style = None if selected else DIM
        renderer.write(marker, style=marker_style)
        renderer.write(" ")
        self._title_style(renderer, focused, disabled)

    def _title_style(self, renderer: Renderer, focused: bool, disabled: bool) -> None:
        if disabled:
            renderer.set_style(DISABLED)
        elif focused:
            renderer.set_style(BLUE)

    def _write_page(self, renderer: Renderer, index: int, count: int) -> None:
        if count == 1:
            return
        icon = self._glyph("*", "•")
        renderer.write("\n")
        renderer.write(" " * (4 if self.ascii else 2))
        renderer.write(icon * index, style=DIM)
        renderer.write(icon)
        renderer.write(icon * max(count - index - 1, 0), style=DIM)
        renderer.write("\n")
