"""Logging configured with rich output.

Usage:
    from ccrelease.log import get_logger

    logger = get_logger(__name__)
    logger.debug("Resolved range %s", rev_range)
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "CCRELEASE_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

_ROOT_LOGGER = "ccrelease"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Args:
        level: Level name. Falls back to $CCRELEASE_LOG_LEVEL, then WARNING.

    Returns:
        The package root logger
    """
    logger = logging.getLogger(_ROOT_LOGGER)

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ccrelease namespace.

    Args:
        name: Module name, typically __name__

    Returns:
        Logger instance
    """
    if name != _ROOT_LOGGER and not name.startswith(f"{_ROOT_LOGGER}."):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
