"""Console logging configuration."""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    """Color formatter for console output"""

    COLORS = {
        'DEBUG': '\033[33m',      # Yellow
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[41m',   # Red background
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color is None:
            return message
        return f"{color}{message}{self.RESET}"


def setup_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Configure the root logger for console output.

    Colors are only used when the stream is a terminal. Calling this again
    replaces the handler installed by the previous call.

    Args:
        verbose: Emit DEBUG records when True, otherwise INFO and above
        stream: Output stream (default: stderr)

    Returns:
        The installed handler
    """
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)

    if hasattr(stream, "isatty") and stream.isatty():
        handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=True,
    )
    return handler


def set_verbose(verbose: bool) -> None:
    """Switch the root logger between DEBUG and INFO."""
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)
