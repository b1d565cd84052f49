"""Prompt widgets.

Every prompt exposes the same capability set:
    handle_key(event) -> bool   # True once, on submission
    will_handle_key(event) -> bool
    draw(renderer) -> int       # rows drawn
    value()                     # the answer, or raises an AskyError
"""

from .base import Formatter, Prompt, PromptState
from .confirm import Confirm
from .message import Message
from .multi_select import MultiSelect
from .number import InputValidator, Number
from .password import Password
from .select import Select
from .text import LineEditPrompt, Text, Validator
from .toggle import Toggle

__all__ = [
    # Base
    "Prompt",
    "PromptState",
    "Formatter",
    "LineEditPrompt",
    "Validator",
    "InputValidator",
    # Prompts
    "Confirm",
    "Toggle",
    "Text",
    "Password",
    "Number",
    "Select",
    "MultiSelect",
    "Message",
]
