"""Logging setup for the resume builder.

Modules log through ``logging.getLogger(__name__)``, so every record lands under
the ``resume_builder`` package logger. This module installs one stderr handler
on that logger.
"""

from __future__ import annotations

import logging
import sys

from resume_builder.config.settings import Settings

LOGGER_NAME = "resume_builder"
HANDLER_NAME = "resume_builder.stderr"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _level_number(level: str | int | None) -> int:
    """Translate a level name into its number; unknown names fall back to INFO."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    return number if isinstance(number, int) else logging.INFO


def _package_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def configure_logging(
    level: str | int | None = None,
    settings: Settings | None = None,
) -> logging.Logger:
    """Route package log records to stderr.

    Args:
        level: Level name or number. Takes precedence over ``settings``.
        settings: Settings whose ``log_level`` is used when ``level`` is None.

    Returns:
        The package logger. Calling again only changes the level.
    """
    if level is None and settings is not None:
        level = settings.log_level
    log_level = _level_number(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    handler = _package_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(log_level)

    return logger


def reset_logging() -> None:
    """Drop all package handlers and restore propagation (used by tests)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
