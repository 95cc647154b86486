"""
Logging for the scene release tools.

One named logger shared by the parser and both CLIs. Console lines go to
stderr, so `release-dump --json` can be piped; a rotating log file is added
when RELEASE_LOG_TO_FILE is on or an explicit file is passed.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import config

LOGGER_NAME = "release_renamer"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_file: str, formatter: logging.Formatter) -> RotatingFileHandler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    return handler


def _console_handlers(logger: logging.Logger) -> List[logging.Handler]:
    # RotatingFileHandler is a StreamHandler subclass too
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler)
    ]


def setup_logger(name: str = LOGGER_NAME, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger. Safe to call repeatedly.

    Args:
        name: Logger name
        log_file: Log file path; without one, config.LOG_PATH is used if
            config.LOG_TO_FILE is set

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is None and config.LOG_TO_FILE:
        log_file = config.LOG_PATH
    if log_file is not None:
        try:
            logger.addHandler(_file_handler(log_file, formatter))
        except OSError as e:
            logger.warning(f"Could not create file handler for {log_file}: {e}")

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the named logger, setting it up on first use."""
    logger = logging.getLogger(name)
    return logger if logger.handlers else setup_logger(name)


def set_quiet_mode(quiet: bool = True) -> None:
    """Show only WARNING and above on the console; the log file keeps INFO."""
    level = logging.WARNING if quiet else logging.INFO
    for handler in _console_handlers(logging.getLogger(LOGGER_NAME)):
        handler.setLevel(level)


def set_debug_mode(debug: bool = True) -> None:
    """Switch the logger and every handler between DEBUG and INFO."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
