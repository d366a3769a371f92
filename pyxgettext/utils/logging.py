"""
Logging configuration and utilities for pyxgettext.

This module provides centralized logging configuration so that library
modules can log through ``logging.getLogger(__name__)`` while the command
line front end controls verbosity and formatting.
"""

import logging
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any

from ..core.types import VerbosityLevel

ROOT_LOGGER = "pyxgettext"


class LogLevel(IntEnum):
    """Custom log levels matching pyxgettext verbosity."""

    TRACE = 5  # Most verbose (-vvv)
    DEBUG = 10  # Debug info (-vv)
    INFO = 20  # Progress (-v)
    WARN = 30  # Warnings (default)
    ERROR = 40  # Errors
    FATAL = 50  # Fatal errors


class XgettextFormatter(logging.Formatter):
    """Plain formatter with optional timestamp and level prefix."""

    def __init__(self, show_timestamps: bool = False, show_level: bool = False) -> None:
        """
        Initialize formatter.

        Args:
            show_timestamps: Whether to include timestamps in output
            show_level: Whether to include log level in output
        """
        self.show_timestamps = show_timestamps
        self.show_level = show_level
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.show_timestamps:
            timestamp = datetime.fromtimestamp(record.created).strftime(
                "%Y-%m-%d %H:%M:%S"
            )
            parts.append(f"[{timestamp}]")

        if self.show_level and record.levelno >= logging.WARNING:
            parts.append(f"{record.levelname.lower()}:")

        parts.append(record.getMessage())

        return " ".join(parts)


class ColoredFormatter(XgettextFormatter):
    """
    Colored formatter for terminal output.

    Adds ANSI color codes to log messages based on their level.
    """

    COLORS = {
        LogLevel.TRACE: "\033[90m",  # Dark gray
        LogLevel.DEBUG: "\033[36m",  # Cyan
        LogLevel.INFO: "\033[0m",  # Default
        LogLevel.WARN: "\033[33m",  # Yellow
        LogLevel.ERROR: "\033[31m",  # Red
        LogLevel.FATAL: "\033[91m",  # Bright red
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.use_colors = use_colors and self._supports_color()

    def _supports_color(self) -> bool:
        """Check if stderr is a terminal."""
        return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if self.use_colors and record.levelno in self.COLORS:
            return f"{self.COLORS[record.levelno]}{message}{self.RESET}"

        return message


class XgettextLogger:
    """
    Main logger class for pyxgettext.

    Owns the handler of the ``pyxgettext`` logger; every module logger
    below it propagates here.
    """

    def __init__(self, name: str = ROOT_LOGGER, verbosity: VerbosityLevel = 0) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            verbosity: Verbosity level (-2 to 3)
        """
        self.logger = logging.getLogger(name)
        self.verbosity = verbosity
        self._setup_logger()

    def _setup_logger(self) -> None:
        self.logger.handlers.clear()

        level = self._verbosity_to_level(self.verbosity)
        self.logger.setLevel(level)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(show_level=True))
        self.logger.addHandler(handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def _verbosity_to_level(self, verbosity: int) -> int:
        """
        Convert verbosity level to logging level.

        Args:
            verbosity: Verbosity level, clamped to -2..3

        Returns:
            Corresponding logging level
        """
        mapping = {
            -2: LogLevel.FATAL,
            -1: LogLevel.ERROR,
            0: LogLevel.WARN,
            1: LogLevel.INFO,
            2: LogLevel.DEBUG,
            3: LogLevel.TRACE,
        }
        return mapping[max(-2, min(3, verbosity))]


def configure_logging(verbosity: int = 0) -> XgettextLogger:
    """
    Install the console handler on the ``pyxgettext`` logger.

    Args:
        verbosity: Verbosity level (``-v`` count minus ``-q`` count)

    Returns:
        Configured logger instance
    """
    return XgettextLogger(ROOT_LOGGER, verbosity)
