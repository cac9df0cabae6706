"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

If the host application (or the test runner) has already put handlers on
the root logger, those are left alone and no stdout handler is added.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _resolve_level(name: str) -> int:
    """Turn a level name like 'debug' into its numeric value, INFO if unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _init_logging(level_name: str = LOG_LEVEL) -> None:
    """Configure the root logger once."""
    global _initialized
    if _initialized:
        return
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(_resolve_level(level_name))
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)
