"""Console logging for the generator CLI.

Human mode:   [LEVEL] message          (coloured on a TTY)
Verbose mode: [LEVEL][HH:MM:SS] message
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

LOGGER_NAME = "actorgen"

_RESET = "\033[0m"

_LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}


def _is_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


class ConsoleFormatter(logging.Formatter):
    """[LEVEL] message, with an optional timestamp and ANSI colours."""

    def __init__(self, timestamps: bool = False, use_colors: bool = False) -> None:
        super().__init__()
        self.timestamps = timestamps
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = f"[{record.levelname}]"
        if self.use_colors:
            level = f"{_LEVEL_COLORS.get(record.levelno, _RESET)}{level}{_RESET}"
        if self.timestamps:
            level += f"[{datetime.now().strftime('%H:%M:%S')}]"
        message = f"{level} {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the actorgen logger from CLI flags.

    Args:
        verbose: DEBUG level with timestamps
        quiet: Warnings and errors only
        stream: Output stream (default: stderr)
    """
    stream = stream or sys.stderr
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ConsoleFormatter(timestamps=verbose, use_colors=_is_tty(stream)))
    logger.addHandler(handler)
    return logger
