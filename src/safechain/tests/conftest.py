from __future__ import annotations

import pytest

from safechain.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings from the environment around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
