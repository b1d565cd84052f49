"""Logging setup for asky.

The library logs through ``logging.getLogger(__name__)`` in each module and
only carries a NullHandler by default. Applications that want to see backend
activity call ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "asky"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | None = None, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``asky`` logger.

    Args:
        level: Logging level. Defaults to ``AskyConfig.from_env().log_level``.
        stream: Where to write. Defaults to stderr, which keeps log lines out
            of the prompt's stdout region.

    Returns:
        The ``asky`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        from .config import AskyConfig

        level = AskyConfig.from_env().log_level
    logger.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if any(getattr(h, "_asky_handler", False) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._asky_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
