"""
Logging configuration for the subtitle interchange library.

Every module creates its logger with ``get_logger(__name__)``, so all of them
live under the ``subkit`` package logger. ``setup_logging`` configures that one
logger: a console handler (ANSI-coloured level names on a TTY) and, when asked,
a UTF-8 log file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from .constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT, APP_NAME


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name of each record."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        # Records are shared between handlers; only this handler sees the colour
        plain_levelname = record.levelname
        record.levelname = f"{color}{plain_levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain_levelname


def _console_formatter(use_colors: bool) -> logging.Formatter:
    if use_colors and sys.stdout.isatty():
        return ColoredFormatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT)
    return logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
    logger_name: str = APP_NAME
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level for the logger and its handlers
        log_file: Optional path of a log file; parent directories are created
        use_colors: Colour level names when the console is a terminal
        logger_name: Logger to configure (the package logger by default)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(logging.DEBUG, Path("logs/subkit.log"))
        >>> logger.info("Conversion started")
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(_console_formatter(use_colors))
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = APP_NAME) -> logging.Logger:
    """Get a logger; modules pass ``__name__`` so it nests under the package logger."""
    return logging.getLogger(name)
