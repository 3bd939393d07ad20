#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Logging configuration for the report reader.

Usage:
    from .logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("querying %s for reports", url)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_raw_level = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_LOG_LEVEL = _raw_level if _raw_level in VALID_LOG_LEVELS else "INFO"

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: dict[str, logging.Logger] = {}
_configured = False


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    console: bool = True,
    format_string: str = DEFAULT_LOG_FORMAT,
) -> None:
    """Configure the ``report_reader`` logger with handlers and formatting.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        console: Whether to log to stderr (default: True)
        format_string: Log message format string
    """
    global _configured

    if _configured:
        return

    root = logging.getLogger("report_reader")

    log_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(log_level)

    formatter = logging.Formatter(format_string, datefmt=TIMESTAMP_FORMAT)

    # stdout is reserved for command output
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the given name.

    Configuration is left to the application (see ``configure_logging``);
    library modules only ask for their logger.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    _loggers[name] = logger
    return logger
