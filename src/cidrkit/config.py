"""
Configuration management for cidrkit.

Loads logging settings from environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv


# Check common locations for .env
ENV_LOCATIONS = [
    Path.home() / ".cidrkit" / ".env",
    Path.home() / ".config" / "cidrkit" / ".env",
    Path.cwd() / ".env",
]

DEFAULT_MAX_LOG_SIZE = 10485760  # 10MB
DEFAULT_MAX_LOG_HISTORY = 5

_TRUE_VALUES = {"1", "true", "yes", "on"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env_file() -> Path | None:
    """Load the first .env file found in the usual locations."""
    for env_path in ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


def _env_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got '{level}'")
    return level


@dataclass
class LogSettings:
    """Where and how log entries are written.

    log_file: Log file path (defaults to ~/.cidrkit/logs/cidrkit.log)
    log_entries: Write entries to the log file at all
    max_log_size: Size in bytes at which the log file is rotated
    max_log_history: Number of rotated log files to keep
    level: Console log level
    """

    log_file: str | None = None
    log_entries: bool = False
    max_log_size: int = DEFAULT_MAX_LOG_SIZE
    max_log_history: int = DEFAULT_MAX_LOG_HISTORY
    level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "LogSettings":
        """Load settings from environment variables."""
        return cls(
            log_file=os.getenv("CIDRKIT_LOG_FILE") or None,
            log_entries=os.getenv("CIDRKIT_LOG_ENTRIES", "").strip().lower() in _TRUE_VALUES,
            max_log_size=_env_int("CIDRKIT_MAX_LOG_SIZE", DEFAULT_MAX_LOG_SIZE),
            max_log_history=_env_int("CIDRKIT_MAX_LOG_HISTORY", DEFAULT_MAX_LOG_HISTORY),
            level=_env_level("CIDRKIT_LOG_LEVEL", "WARNING"),
        )


# Global settings instance
_settings: LogSettings | None = None


def get_settings() -> LogSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        load_env_file()
        _settings = LogSettings.from_env()
    return _settings


def set_settings(settings: LogSettings | None) -> None:
    """Set (or with None, reset) the global settings instance."""
    global _settings
    _settings = settings
