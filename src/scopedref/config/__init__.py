"""Configuration module using Pydantic Settings, plus package logging setup.

Usage:
    from scopedref.config import GuardSettings, configure_logging

    settings = GuardSettings(cleanup_failure_level="warning")
    configure_logging("DEBUG")
"""

from scopedref.config.logging_config import configure_logging, get_logger
from scopedref.config.settings import GuardSettings, get_settings, reset_settings

__all__ = [
    "GuardSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
