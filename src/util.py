#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

# Standard library imports
import io
import logging
import os
import re
from datetime import date, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Local application imports
import constants as const
from exceptions import DateParseError


# Module-level logger
logger = logging.getLogger(__name__)

AS_OF_RE = re.compile(r"^\d{2}/\d{2}/\d{4} as of (\d{2}/\d{2}/\d{4})$")


def setup_logger(name: str | None = None, level: str | None = None, console: bool = True,
                 log_file: str | None = None, console_level: str | None = None) -> logging.Logger:
    """
    Setup a logger with file and optional console output.

    Args:
        name: Logger name (use __name__ from calling module). If None, configures root logger.
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO or env LOG_LEVEL.
        console: Whether to also log to console (default True for main apps)
        log_file: Custom log filename (defaults to const.LOG_FILE)
        console_level: Level for the console handler only. Defaults to level.

    Returns:
        logging.Logger: Configured logger instance

    Example:
        # For application entry point (cli.py):
        util.setup_logger(name=None, level='INFO', console=True, console_level='WARNING')
        logger = logging.getLogger(__name__)

        # For library modules:
        logger = util.get_logger(__name__)
    """
    if level is None:
        level = const.LOG_LEVEL
    level = level.upper()

    numeric_level = getattr(logging, level, logging.INFO)

    # Get or create logger
    logger = logging.getLogger(name) if name else logging.getLogger()

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(numeric_level)

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%H:%M:%S"
    )

    log_filename = log_file if log_file else const.LOG_FILE

    # File handler with rotation (don't delete on startup)
    file_handler = RotatingFileHandler(
        filename=log_filename,
        maxBytes=const.MAX_LOG_SIZE,
        backupCount=const.BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setFormatter(detailed_formatter)
    file_handler.setLevel(logging.DEBUG)  # Capture everything to file
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_numeric = getattr(logging, console_level.upper(), numeric_level) if console_level else numeric_level
        console_handler.setLevel(console_numeric)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module-specific logger. This is the standard way to get loggers in library modules.

    Args:
        name: Use __name__ from the calling module

    Returns:
        logging.Logger: Logger instance for the module
    """
    return logging.getLogger(name)


def read_file_to_buffer(path: str | os.PathLike) -> io.BytesIO:
    """
    Load an entire file into a seekable in-memory buffer.

    Args:
        path: File to load

    Returns:
        io.BytesIO positioned at the start of the content
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        logger.error(f"Unable to read file {path}: {e}")
        raise
    logger.debug(f"Loaded {len(content)} bytes from {path}")
    return io.BytesIO(content)


def parse_broker_date(date_str: str) -> date:
    """
    Parse a broker date, 'MM/DD/YYYY' or 'MM/DD/YYYY as of MM/DD/YYYY'.

    The settlement qualifier form resolves to the "as of" date.
    """
    try:
        return datetime.strptime(date_str, "%m/%d/%Y").date()
    except ValueError:
        pass

    match = AS_OF_RE.match(date_str)
    if match is None:
        logger.error(f"Could not match date: {date_str}")
        raise DateParseError(date_str)
    try:
        return datetime.strptime(match.group(1), "%m/%d/%Y").date()
    except ValueError as e:
        logger.error(f"Could not parse 'as of' date: {date_str}")
        raise DateParseError(date_str) from e


def to_qif_date(d: date) -> str:
    # M/D'YY
    return f"{d.month}/{d.day}'{d.year % 100:02d}"


def strip_currency(value: str) -> str:
    return value.replace(const.CURRENCY_MARKER, "")


def strip_leading_minus(value: str) -> str:
    return value.lstrip("-")


def negate_quantity(quantity: str) -> str:
    if quantity.startswith("-"):
        return quantity[1:]
    return f"-{quantity}"
