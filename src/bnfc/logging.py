"""
Logging configuration and utilities.

All loggers live under the ``bnfc`` namespace. Library modules obtain one with
``get_logger(__name__)`` and log at DEBUG; the command line configures output
once through ``setup_logging``.
"""

from __future__ import annotations

import logging
import os
import sys

__all__ = ["LOGGER_NAME", "setup_logging", "get_logger"]

LOGGER_NAME = "bnfc"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the ``bnfc`` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR). Defaults to the
            BNFC_LOG_LEVEL environment variable, then INFO.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = os.environ.get("BNFC_LOG_LEVEL", "INFO")
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)

    # Keep records away from the root logger's handlers.
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically ``__name__``).

    Returns:
        Logger under the ``bnfc`` namespace.
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
