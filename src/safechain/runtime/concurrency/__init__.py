"""Concurrency primitives used by the chain engine.

Single-threaded cooperative model on asyncio: nothing here blocks, and
nothing here cancels work once it has started.
"""

from __future__ import annotations

from .interop import background_count, detach, is_pending, settle

__all__ = ["background_count", "detach", "is_pending", "settle"]
