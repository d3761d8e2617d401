"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for guards.

Usage:
    from scopedref.config import GuardSettings, get_settings

    # Load from environment variables (SCOPEDREF_*)
    settings = get_settings()

    # Or override with explicit values
    settings = GuardSettings(warn_unreleased=True)
"""

from __future__ import annotations

import logging
from functools import lru_cache

try:
    from pydantic import field_validator
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install scopedref"
    ) from e

_LEVEL_NAMES = frozenset(logging.getLevelNamesMapping())


class GuardSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for guard diagnostics.

    Attributes:
        log_cleanup_failures: Log exceptions raised by cleanup routines.
        cleanup_failure_level: Log level used for cleanup failures.
        warn_unreleased: Emit ResourceWarning when a guard is only released
            by the garbage collector.
        log_level: Level applied by configure_logging().

    Environment Variables:
        SCOPEDREF_LOG_CLEANUP_FAILURES
        SCOPEDREF_CLEANUP_FAILURE_LEVEL
        SCOPEDREF_WARN_UNRELEASED
        SCOPEDREF_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOPEDREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_cleanup_failures: bool = True
    cleanup_failure_level: str = "ERROR"
    warn_unreleased: bool = False
    log_level: str = "WARNING"

    @field_validator("cleanup_failure_level", "log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def cleanup_failure_levelno(self) -> int:
        """Return the numeric logging level for cleanup failures."""
        return logging.getLevelNamesMapping()[self.cleanup_failure_level]


@lru_cache(maxsize=1)
def get_settings() -> GuardSettings:
    """Return the process-wide settings, loading them on first use."""
    return GuardSettings()


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads the environment."""
    get_settings.cache_clear()
