"""Foundation layer: configuration shared by every safechain module."""

from .config import SafechainSettings, clear_settings_cache, configure_logging, get_settings

__all__ = ["SafechainSettings", "clear_settings_cache", "configure_logging", "get_settings"]
