"""Logging configuration for resourcepack-cli."""

from __future__ import annotations

import logging
import sys
from typing import Final, TextIO

PACKAGE_LOGGER: Final[str] = "resourcepack_cli"
LOG_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]
        formatted = super().format(record)
        if record.levelname in formatted:
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}", 1)
        return formatted


def level_for_verbosity(verbosity: int) -> int:
    """Map -q/-v counts to a level: <0 ERROR, 0 WARNING, 1 INFO, >=2 DEBUG."""
    if verbosity < 0:
        return logging.ERROR
    if verbosity == 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0, stream: TextIO | None = None) -> logging.Logger:
    """Install a console handler on the package logger.

    Calling it again replaces the previous handler, so repeated CLI runs in
    one process (tests) do not duplicate output.

    Args:
        verbosity: Net count of -v minus -q flags
        stream: Output stream (stderr by default)

    Returns:
        The configured package logger
    """
    stream = stream or sys.stderr
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    use_color = hasattr(stream, "isatty") and stream.isatty()
    handler.setFormatter(ColoredFormatter(LOG_FORMAT) if use_color else logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level_for_verbosity(verbosity))
    return logger
