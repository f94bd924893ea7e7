"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, get_settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging, mask_email
from shared.config.constants import DayOfWeek, Limits

__all__ = [
    # settings
    "settings",
    "get_settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    "mask_email",
    # constants
    "DayOfWeek",
    "Limits",
]
