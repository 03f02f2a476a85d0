"""
Logging configuration for cidrkit.

Provides the log sink handed to the calculators, plus rotating file
logging with structured formatting for production use.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Protocol

from cidrkit.config import LogSettings


ROOT_LOGGER_NAME = "cidrkit"


class Severity(str, Enum):
    """Severity of a log sink entry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LogSink(Protocol):
    """Anything that accepts leveled text entries tagged with a component."""

    def write(self, message: str, severity: Severity, component: str) -> None:
        ...


class NullSink:
    """Sink that drops every entry."""

    def write(self, message: str, severity: Severity, component: str) -> None:
        return None


NULL_SINK = NullSink()


class LoggerSink:
    """Sink that forwards entries to the standard logging tree.

    Each component logs through its own child of the cidrkit logger, so
    entries from the decoder show up as 'cidrkit.BinaryAddressDecoder'.
    """

    def __init__(self, logger: logging.Logger | None = None, enabled: bool = True):
        self.logger = logger or logging.getLogger(ROOT_LOGGER_NAME)
        self.enabled = enabled

    def write(self, message: str, severity: Severity, component: str) -> None:
        if not self.enabled:
            return
        level = _LEVELS[Severity(severity)]
        self.logger.getChild(component).log(level, message)


class StructuredFormatter(logging.Formatter):
    """Structured JSON-like formatter for easier log parsing."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        if not hasattr(record, 'module_name'):
            record.module_name = record.module
        if not hasattr(record, 'function_name'):
            record.function_name = record.funcName

        return super().format(record)


def default_log_path() -> Path:
    return Path.home() / ".cidrkit" / "logs" / "cidrkit.log"


def setup_logging(
    settings: LogSettings | None = None,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Set up logging for cidrkit.

    Args:
        settings: Log file location, rotation limits and console level
        enable_console: Enable console logging (on stderr)

    Returns:
        Configured cidrkit logger
    """
    settings = settings or LogSettings()
    console_level = getattr(logging, settings.level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if settings.log_entries else console_level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_fmt = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_fmt = StructuredFormatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)-32s | %(module_name)-15s | '
            '%(function_name)-20s | %(lineno)-4d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(console_fmt)
        logger.addHandler(console_handler)

    # File handler with rotation
    if settings.log_entries:
        log_path = Path(settings.log_file) if settings.log_file else default_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.max_log_size,
            backupCount=settings.max_log_history,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_fmt)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (e.g., 'cidrkit.ip.core')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_logging(debug: bool = False, log_to_file: bool = False) -> logging.Logger:
    """
    Quick logging configuration.

    Args:
        debug: Log everything down to DEBUG on the console
        log_to_file: Enable file logging at the default location
    """
    return setup_logging(
        LogSettings(level="DEBUG" if debug else "WARNING", log_entries=log_to_file),
        enable_console=True,
    )
