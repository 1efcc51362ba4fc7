# File: meeting_calendar/core/config_manager.py
"""
Centralized configuration management for the meeting calendar.
Loads settings from environment variables (and an optional .env file).
"""

import logging
import os
from pathlib import Path
from typing import List

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# "NAME=value" entries that could not be parsed; reported by Config.validate()
_malformed_settings: List[str] = []


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        _malformed_settings.append(f"{name}={raw!r}")
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ['yes', 'true', '1', 'on', 'y', 't']


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from meeting_calendar/core/
    LOGS_DIR = Path(os.getenv("MC_LOGS_DIR", str(BASE_DIR / "logs")))

    # Timeline fill tuning. Up to this many attendees AND this window length
    # the fill runs sequentially; anything larger fans out over a thread pool.
    SEQUENTIAL_MAX_ATTENDEES = _env_int("MC_SEQUENTIAL_MAX_ATTENDEES", 8)
    SEQUENTIAL_MAX_WINDOW_MINUTES = _env_int("MC_SEQUENTIAL_MAX_WINDOW_MINUTES", 960)
    FILL_MAX_WORKERS = _env_int("MC_FILL_MAX_WORKERS", 4)

    # Logging
    LOG_LEVEL = os.getenv("MC_LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = _env_bool("MC_LOG_TO_FILE", False)

    # Console harness
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "Europe/Amsterdam")
    DEMO_WINDOW_HOURS = _env_int("MC_DEMO_WINDOW_HOURS", 8)

    @classmethod
    def log_level(cls) -> int:
        """Resolve LOG_LEVEL to a logging constant, falling back to INFO."""
        level = logging.getLevelName(cls.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def validate(cls) -> bool:
        """Validate that all configuration values are usable."""
        errors: List[str] = [
            f"{setting} is not an integer" for setting in _malformed_settings
        ]

        if cls.SEQUENTIAL_MAX_ATTENDEES < 0:
            errors.append("MC_SEQUENTIAL_MAX_ATTENDEES must not be negative")

        if cls.SEQUENTIAL_MAX_WINDOW_MINUTES < 0:
            errors.append("MC_SEQUENTIAL_MAX_WINDOW_MINUTES must not be negative")

        if cls.FILL_MAX_WORKERS <= 0:
            errors.append("MC_FILL_MAX_WORKERS must be positive")

        if cls.DEMO_WINDOW_HOURS <= 0:
            errors.append("MC_DEMO_WINDOW_HOURS must be positive")

        try:
            pytz.timezone(cls.TARGET_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            errors.append(f"Unknown timezone: {cls.TARGET_TIMEZONE}")

        if errors:
            # Imported here: the logger module reads Config at import time
            from meeting_calendar.utils.logger import setup_logger
            logger = setup_logger(__name__)
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
