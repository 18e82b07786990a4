"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging

APP_LOGGER_NAME = "wave_editor"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure the root logger with a single console handler."""
    logger = logging.getLogger()  # root
    logger.setLevel(level)

    # Clear duplicate handlers if reinit
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.setLevel(level)
    logger.addHandler(console)

    logger.debug("%s logging initialised at %s", APP_LOGGER_NAME, logging.getLevelName(logger.level))
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return a logger under the application namespace.

    Usage: from wave_editor.log import get_logger; log = get_logger(__name__)
    """
    return logging.getLogger(name or APP_LOGGER_NAME)
