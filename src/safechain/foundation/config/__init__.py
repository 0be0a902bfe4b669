"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    SafechainSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
    settings_or_defaults,
)

__all__ = [
    "SafechainSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
    "settings_or_defaults",
]
