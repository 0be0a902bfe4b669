"""Sync/async interoperability utilities.

Bridges plain values and awaitables for the chain engine:
    - is_pending: the one test for "is this an awaitable"
    - settle: await until a non-awaitable value appears
    - detach: fire-and-forget an awaitable without ever waiting on it

Example:
    >>> is_pending(asyncio.sleep(0))
    True
    >>> value = await settle(fetch())  # nested awaitables are flattened
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, TypeGuard

from safechain.foundation.config import settings_or_defaults

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger("safechain.interop")

# Strong references to detached tasks; the loop only keeps weak ones
_background: set[asyncio.Future[object]] = set()


def is_pending(value: object) -> TypeGuard[Awaitable[object]]:
    """Whether value is an awaitable (coroutine, Future, or object with __await__)."""
    return inspect.isawaitable(value)


async def settle(value: object) -> object:
    """Await value until it is no longer an awaitable.

    Exceptions raised while awaiting propagate to the caller.
    """
    while is_pending(value):
        value = await value
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Fire-and-forget
# ─────────────────────────────────────────────────────────────────────────────

def detach(awaitable: Awaitable[object]) -> None:
    """Let an awaitable run on its own; its outcome is discarded.

    With a running loop, the awaitable is scheduled as a background task whose
    failure is logged at DEBUG and otherwise dropped. Without a running loop
    nothing can drive a coroutine, so it is closed unstarted; other awaitables
    are left to whoever owns them.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        return

    task = asyncio.ensure_future(awaitable, loop=loop)
    _background.add(task)
    task.add_done_callback(_forget)


def _forget(task: asyncio.Future[object]) -> None:
    _background.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None and settings_or_defaults().log_suppressed:
        logger.debug("detached awaitable failed: %r", exc)


def background_count() -> int:
    """Number of detached tasks still running."""
    return len(_background)
