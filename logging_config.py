"""Logging configuration for the record store API.

Everything logs under the ``recordstore`` logger so the application's
output can be tuned independently of uvicorn and SQLAlchemy.
"""

import logging
import sys
from typing import Optional

from config import LOG_LEVEL

__all__ = ["setup_logging", "get_logger"]

ROOT_LOGGER = "recordstore"


class ColoredConsoleHandler(logging.StreamHandler):
    """Console handler that colours the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if hasattr(self.stream, "isatty") and self.stream.isatty():
            color = self.COLORS.get(record.levelname, "")
            if color:
                message = message.replace(
                    f"[{record.levelname}]", f"[{color}{record.levelname}{self.RESET}]", 1
                )
        return message


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the application logger.

    Args:
        level: Level name (default: ``LOG_LEVEL`` from config)

    Returns:
        The configured ``recordstore`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level or LOG_LEVEL)

    # Replace rather than stack handlers when called more than once
    logger.handlers.clear()

    handler = ColoredConsoleHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``recordstore.<name>`` (or the root app logger)."""
    if name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
