"""Logging setup for ScriptDNA."""

from __future__ import annotations

import logging
from typing import Union

ROOT_LOGGER = "scriptdna"
LOG_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger and set its level."""
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    return logger
