"""Runtime support for pending (awaitable) chain steps."""

from .concurrency import background_count, detach, is_pending, settle

__all__ = ["background_count", "detach", "is_pending", "settle"]
