"""Logging configuration for shelfscan.

Colored console logging with an optional rotating file handler, plus a
timing context manager used around page extraction.
"""

import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog


CONSOLE_FORMAT_COLOR = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "SHELFSCAN_LOG_LEVEL"
LOG_DIR_ENV = "SHELFSCAN_LOG_DIR"


def _setup_console_handler(level: int) -> logging.Handler:
    """Create a colored console handler.

    Args:
        level: Logging level

    Returns:
        Configured console handler
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = colorlog.ColoredFormatter(
        CONSOLE_FORMAT_COLOR,
        datefmt=DATE_FORMAT,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )
    console_handler.setFormatter(formatter)
    return console_handler


def _setup_file_handler(level: int, log_dir: Path) -> logging.Handler:
    """Create a rotating file handler writing to ``log_dir/shelfscan.log``.

    Args:
        level: Logging level
        log_dir: Directory for log files

    Returns:
        Configured rotating file handler
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    # max 10MB, keep 5 backups
    file_handler = RotatingFileHandler(
        log_dir / "shelfscan.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))

    return file_handler


def get_logger(name: str, log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Get or create a logger with a console handler and optional file handler.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_dir: Directory for log files. Falls back to SHELFSCAN_LOG_DIR;
                 no file handler is attached when neither is set.
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses SHELFSCAN_LOG_LEVEL, defaulting to INFO.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure once per logger name
    if not logger.handlers:
        if level is not None:
            log_level_str = level.upper()
        else:
            log_level_str = os.environ.get(LOG_LEVEL_ENV, 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        logger.setLevel(log_level)
        logger.addHandler(_setup_console_handler(log_level))

        if log_dir is None and os.environ.get(LOG_DIR_ENV):
            log_dir = Path(os.environ[LOG_DIR_ENV])
        if log_dir is not None:
            logger.addHandler(_setup_file_handler(log_level, log_dir))

        logger.propagate = False

    return logger


@contextmanager
def log_execution_time(logger: logging.Logger, operation: str):
    """Context manager to log how long an operation took.

    Args:
        logger: Logger instance
        operation: Name of the operation

    Usage:
        with log_execution_time(logger, "search page extraction"):
            parser.parse_search_page(html, query)
    """
    logger.debug(f"Starting: {operation}")
    start_time = time.perf_counter()

    try:
        yield
    finally:
        duration = time.perf_counter() - start_time
        logger.debug(f"Completed: {operation} in {duration:.3f}s")


def _apply_level(logger: logging.Logger, log_level: int) -> None:
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Change the log level of a logger and all its handlers.

    Args:
        logger: Logger instance
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_upper = level.upper()
    _apply_level(logger, getattr(logging, level_upper, logging.INFO))

    logger.debug(f"Log level changed to {level_upper}")


def set_package_log_level(level: str, package: str = "shelfscan") -> None:
    """Change the level of every logger already created under ``package``.

    Module loggers do not propagate, so each one is updated directly.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        package: Top-level logger name
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    for name in list(logging.root.manager.loggerDict):
        if name != package and not name.startswith(package + "."):
            continue
        _apply_level(logging.getLogger(name), log_level)
