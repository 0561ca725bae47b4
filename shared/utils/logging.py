"""Shared logging utilities

Service modules log through logging.getLogger(__name__). The entry point
calls get_logger() once on the top-level package so every child logger
reaches stdout through a single handler.
"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[int, str, None]) -> int:
    """"debug" / "INFO" / 10 / None -> logging level (unknown names -> INFO)"""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def get_logger(name: str, level: Union[int, str, None] = None) -> logging.Logger:
    """Return a logger that writes to stdout

    Args:
        name: logger name (a package name covers all of its modules)
        level: log level or level name (default: INFO)

    Returns:
        logging.Logger instance
    """
    logger = logging.getLogger(name)

    if not any(getattr(h, "_shared_stdout", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._shared_stdout = True
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(resolve_level(level))
    return logger

