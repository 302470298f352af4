# SPDX-FileCopyrightText: 2026 Giovanni MARIANO
#
# SPDX-License-Identifier: MPL-2.0

"""
Logging configuration for the surfacearray package.

Every module logs through ``logging.getLogger(__name__)`` below the
``surfacearray`` namespace. Nothing is printed unless the application (or
:func:`setup_logging` / :func:`enable_logging`) attaches a handler.

Example:
    import surfacearray as sa

    sa.setup_logging(sa.LOG_DEBUG)
    sa.set_log_level(sa.LOG_TRACE)   # per-bin messages
"""

from __future__ import annotations
from typing import Optional
import logging
import sys

PACKAGE_LOGGER = "surfacearray"

# Verbose per-bin output sits below DEBUG
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Log level constants
LOG_NONE = logging.CRITICAL + 10
LOG_ERROR = logging.ERROR
LOG_WARN = logging.WARNING
LOG_INFO = logging.INFO
LOG_DEBUG = logging.DEBUG
LOG_TRACE = TRACE

_package_logger = logging.getLogger(PACKAGE_LOGGER)
_package_logger.addHandler(logging.NullHandler())


def set_log_level(level: int) -> None:
    """Set the level of the package logger."""
    _package_logger.setLevel(level)


def get_log_level() -> int:
    """Get the effective level of the package logger."""
    return _package_logger.getEffectiveLevel()


def setup_logging(level: int = LOG_INFO, log_file: Optional[str] = None) -> None:
    """Configure console (and optional file) output for the package logger.

    Args:
        level: Logging level (e.g. LOG_DEBUG, LOG_TRACE).
        log_file: Optional path to save logs to a file.
    """
    # Drop handlers from a previous call to avoid duplicate lines
    for handler in list(_package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            _package_logger.removeHandler(handler)
            handler.close()

    _package_logger.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    _package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        _package_logger.addHandler(file_handler)


def enable_logging() -> None:
    """Enable logging at INFO level."""
    setup_logging(LOG_INFO)


def disable_logging() -> None:
    """Disable logging."""
    set_log_level(LOG_NONE)
