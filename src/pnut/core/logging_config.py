"""
Logging configuration for applications embedding pnut.

The library itself only creates module loggers under the ``pnut`` namespace and
never installs handlers on import. Applications (or notebooks) call
setup_logging() to see diagnostics on the console or in a file.
"""

from __future__ import annotations

import logging
import sys

from .config import ChartSettings

__all__ = ["setup_logging"]

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the ``pnut`` logger.

    Args:
        level: Logging level (e.g. logging.DEBUG or "INFO"). Defaults to
            ChartSettings.load().log_level.
        log_file: Optional path to also write logs to.

    Returns:
        logging.Logger: The configured ``pnut`` logger.
    """
    if level is None:
        level = ChartSettings.load().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("pnut")
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
