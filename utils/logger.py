"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

Output goes to stdout and, when LOG_FILE is set, to a size-rotated file.
LOG_MODULE_LEVELS can raise or lower the level of individual modules,
e.g. to trace the SQL of one repository without flooding the rest.
"""

import logging
import logging.handlers
import sys
from typing import Optional

from config import (
    LOG_FILE,
    LOG_FILE_BACKUPS,
    LOG_FILE_MAX_BYTES,
    LOG_LEVEL,
    LOG_MODULE_LEVELS,
)

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _level(name: str) -> int:
    return getattr(logging, name, logging.INFO)


def build_handlers(log_file: Optional[str] = None) -> list[logging.Handler]:
    """
    Create the console handler and, if `log_file` is given, a rotating file handler.

    Args:
        log_file: Path of the log file; None or empty for console only.

    Returns:
        Handlers sharing one formatter.
    """
    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _init_logging() -> None:
    """Configure the root logger once."""
    global _initialized
    if _initialized:
        return
    root = logging.getLogger()
    root.setLevel(_level(LOG_LEVEL))
    for handler in build_handlers(LOG_FILE):
        root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger, with its own level if LOG_MODULE_LEVELS names it.
    """
    _init_logging()
    logger = logging.getLogger(name)
    if name in LOG_MODULE_LEVELS:
        logger.setLevel(_level(LOG_MODULE_LEVELS[name]))
    return logger
