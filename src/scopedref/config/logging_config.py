"""Logging setup for the scopedref package.

Library modules log through ``get_logger(__name__)``. Nothing is printed
unless the application configures logging, either its own way or with
``configure_logging()``, which only touches the ``scopedref`` logger.
"""

from __future__ import annotations

import logging
import sys

from scopedref.config.settings import get_settings

PACKAGE_LOGGER = "scopedref"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure_logging(
    level: str | int | None = None,
    fmt: str | None = None,
    datefmt: str | None = None,
) -> str | int:
    """Attach a stream handler to the package logger.

    Calling it again replaces the level and formatter of the existing handler
    instead of adding a second one.

    Args:
        level: Log level; defaults to GuardSettings.log_level.
        fmt: Format string for records.
        datefmt: Date format for records.

    Returns:
        The level that was applied.
    """
    global _handler

    if isinstance(level, str):
        level = level.upper()
    if level is None:
        level = get_settings().log_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        logger.addHandler(_handler)
    _handler.setFormatter(
        logging.Formatter(fmt=fmt or _DEFAULT_FORMAT, datefmt=datefmt or _DEFAULT_DATEFMT)
    )
    _handler.setLevel(level)
    logger.setLevel(level)
    return level


def get_logger(name: str) -> logging.Logger:
    """Return a module-scoped logger."""
    return logging.getLogger(name)
