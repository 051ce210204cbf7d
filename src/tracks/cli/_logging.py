"""Diagnostic logging for the CLI, off unless ``TRACKS_LOG_LEVEL`` asks for it."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tracks"

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(value: str | None) -> int | None:
    """Map a level name to a ``logging`` level. ``off`` and unknown names disable logging."""
    if value is None:
        return None
    return LOG_LEVELS.get(value.strip().lower())


def configure_logging(level: str | None) -> logging.Logger:
    """Configure the ``tracks`` logger tree and return its root."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = False

    resolved = parse_log_level(level)
    if resolved is None:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    return logger
