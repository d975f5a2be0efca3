"""Logging configuration for the MyRA API."""
from __future__ import annotations
import logging
import sys
from typing import Optional

from myra.core.config import LOG_LEVEL


def setup_logging(level: Optional[str] = None, name: str = "myra") -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.
        name: Logger name; module loggers created with getLogger(__name__) propagate here.

    Returns:
        Configured logger
    """
    level = level or LOG_LEVEL
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
