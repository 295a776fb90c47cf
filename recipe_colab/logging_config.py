"""Logging configuration for Recipe Colab."""

import logging
import sys
from datetime import datetime

from .config import get_log_level


class ConsoleFormatter(logging.Formatter):
    """Human-readable single-line formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        formatted = f"{timestamp} | {level} | {record.name} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def configure_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ...). Falls back to
            RECIPE_COLAB_LOG_LEVEL from the environment.
        log_file: Optional file path to also write logs to.
    """
    level_str = (log_level or get_log_level()).upper()
    level = getattr(logging, level_str, logging.WARNING)

    formatter = ConsoleFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Logs go to stderr so CLI output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # Third-party noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("markdown_it").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured: level=%s", level_str)
