"""Configuration for the prompt backends.

Loading priority (highest first):
1. Explicit keyword overrides passed to ``AskyConfig.from_env``
2. Environment variables (``ASKY_*``, ``NO_COLOR``)
3. Defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .style import DefaultTheme, Theme

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_level(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class AskyConfig:
    """Backend settings. Prompts themselves are configured per instance."""

    ascii: bool = False
    color: bool = True
    exit_on_abort: bool = False
    escape_timeout: float = 0.05
    log_level: int = logging.WARNING

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, **overrides: Any
    ) -> AskyConfig:
        env = os.environ if env is None else env
        color = _env_bool(env, "ASKY_COLOR", True)
        if "NO_COLOR" in env:
            color = False
        config = cls(
            ascii=_env_bool(env, "ASKY_ASCII", False),
            color=color,
            exit_on_abort=_env_bool(env, "ASKY_EXIT_ON_ABORT", False),
            escape_timeout=_env_float(env, "ASKY_ESCAPE_TIMEOUT", 0.05),
            log_level=_env_level(env, "ASKY_LOG_LEVEL", logging.WARNING),
        )
        return replace(config, **overrides) if overrides else config

    def theme(self) -> Theme:
        """The theme backends should draw with."""
        return DefaultTheme(ascii=self.ascii)
