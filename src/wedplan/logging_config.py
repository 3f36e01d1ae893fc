"""Logging setup for wedplan."""

import logging
import sys

LOGGER_NAME = "wedplan"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stderr handler to the wedplan logger.

    Calling this again only updates the level, so it is safe from both the
    CLI group and the API app factory.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_wedplan_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._wedplan_handler = True
        logger.addHandler(handler)
    return logger


def reset_logging() -> None:
    """Remove the handler installed by configure_logging()."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_wedplan_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
