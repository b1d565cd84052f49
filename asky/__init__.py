"""Interactive prompts for terminals and hosted frame loops.

Usage:
    from asky import Confirm, Number, Select, Text

    # Blocking, on the terminal
    name = Text(message="What's your name?").prompt()
    age = Number(message="Age?", kind="u8").prompt()
    ok = Confirm(message="Continue?").prompt()
    color = Select.of("Favorite color?", ["red", "green", "blue"]).prompt()

    # Inside a host frame loop
    from asky import Asky, HostedBackend, SceneNode

    backend = HostedBackend()
    asky = Asky(backend)
    answer = await backend.run_until(asky.listen(Confirm(), SceneNode("q")))
"""

import logging

from .config import AskyConfig
from .errors import (
    AskyError,
    Cancel,
    InvalidCount,
    InvalidValue,
    IoFailure,
    ValidationFailed,
)
from .hosted import Asky, AskyState, HostedBackend, HostedRenderer, SceneNode, TextNode
from .keys import Key, KeyEvent
from .line_input import CursorMove, LineInput
from .log import setup_logging
from .numeric import NumKind, num_kind
from .prompts import (
    Confirm,
    Formatter,
    LineEditPrompt,
    Message,
    MultiSelect,
    Number,
    Password,
    Prompt,
    PromptState,
    Select,
    Text,
    Toggle,
)
from .renderer import DrawTime, Renderer, StringRenderer
from .selection import Direction, SelectionCursor, SelectOption
from .style import DefaultTheme, Flags, PlainTheme, Region, Section, Theme
from .terminal import TermRenderer, listen, prompt

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Prompts
    "Prompt",
    "PromptState",
    "Formatter",
    "LineEditPrompt",
    "Confirm",
    "Toggle",
    "Text",
    "Password",
    "Number",
    "Select",
    "MultiSelect",
    "Message",
    # Building blocks
    "LineInput",
    "CursorMove",
    "SelectionCursor",
    "SelectOption",
    "Direction",
    "NumKind",
    "num_kind",
    "Key",
    "KeyEvent",
    # Rendering
    "Renderer",
    "StringRenderer",
    "DrawTime",
    "Region",
    "Section",
    "Flags",
    "Theme",
    "DefaultTheme",
    "PlainTheme",
    # Backends
    "TermRenderer",
    "listen",
    "prompt",
    "HostedBackend",
    "HostedRenderer",
    "Asky",
    "AskyState",
    "SceneNode",
    "TextNode",
    # Config & errors
    "AskyConfig",
    "setup_logging",
    "AskyError",
    "Cancel",
    "InvalidValue",
    "ValidationFailed",
    "IoFailure",
    "InvalidCount",
]
