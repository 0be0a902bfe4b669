"""Environment-based configuration using pydantic-settings.

Example:
    >>> from safechain.foundation.config import get_settings
    >>> get_settings().log_level
    'WARNING'

    # Or with environment variables:
    # SAFECHAIN_LOG_LEVEL=DEBUG
    # SAFECHAIN_LOG_SUPPRESSED=false
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Literal, TextIO

from pydantic import Field, PositiveInt, ValidationError, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SafechainSettings(BaseSettings):
    """Root settings for safechain.

    Loads configuration from environment variables with SAFECHAIN_ prefix.

    Example environment variables:
        SAFECHAIN_DEBUG=true
        SAFECHAIN_LOG_LEVEL=DEBUG
        SAFECHAIN_ERROR_MAX_MESSAGE=500
    """

    model_config = SettingsConfigDict(
        env_prefix="SAFECHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_suppressed: bool = Field(default=True, description="Log swallowed watch failures at DEBUG")
    error_max_message: PositiveInt = Field(default=2000, description="Cap on serialized opaque error messages")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Normalize level name to uppercase."""
        return v.upper() if isinstance(v, str) else v

    @computed_field
    @property
    def effective_level(self) -> int:
        """Numeric logging level, DEBUG when debug mode is on."""
        return logging.DEBUG if self.debug else logging.getLevelName(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> SafechainSettings:
    """Get the global settings instance (cached)."""
    return SafechainSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()


def settings_or_defaults() -> SafechainSettings:
    """Like get_settings(), but falls back to field defaults when the environment is invalid.

    Used on paths that must never raise, such as error normalization and watch.
    """
    try:
        return get_settings()
    except ValidationError:
        return SafechainSettings.model_construct()


def configure_logging(stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``safechain`` logger at the configured level.

    The library installs no handlers by itself; applications call this once at startup
    if they want safechain's diagnostics on a stream. Calling it again replaces the handler.
    """
    root = logging.getLogger("safechain")
    for handler in [h for h in root.handlers if getattr(h, "_safechain", False)]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    handler._safechain = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(get_settings().effective_level)
    return root
