"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from slyp.config.settings import settings

    db_url = settings.DATABASE_URL
    timeout = settings.EXTRACTOR_TIMEOUT_SECONDS
"""

from slyp.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
