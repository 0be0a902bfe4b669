"""safechain - Chainable results for sync and async error handling.

One fluent API over four outcomes: immediate success, immediate failure, and their
awaitable counterparts. Steps are sequenced without branching on exceptions versus
coroutines; once a step is awaitable, the rest of the chain is too.

Quick Start:
    >>> from safechain import safe
    >>>
    >>> safe(5).map(lambda x: x * 2).map(lambda x: x + 3).unwrap()
    13
    >>> safe(lambda: int("nope")).or_else(0)
    0

Async steps:
    >>> async def fetch_user(uid: int) -> dict: ...
    >>>
    >>> chain = safe(42).map(fetch_user).if_fail(lambda e: {"id": None})
    >>> user = await chain.unwrap()

Observation never affects the chain:
    >>> from safechain import watch_error
    >>> safe(1).map(risky).watch(watch_error(report)).or_else(None)

Composition:
    >>> from safechain import pipe
    >>> pipe(str.strip, int, lambda n: n * 2)(" 21 ").unwrap()
    42
"""

from .errors import ChainError, ErrorInfo, ErrorKind, normalize_error
from .foundation import SafechainSettings, clear_settings_cache, configure_logging, get_settings
from .monads import (
    Chain,
    MaybePending,
    PendingResult,
    Result,
    empty,
    fail,
    from_thunk,
    from_value,
    ok,
    safe,
    update,
)
from .observability import watch_error, watch_log, watch_ok
from .pipeline import pipe
from .runtime import is_pending

__version__ = "0.1.0"

__all__ = [
    # Chain
    "Chain",
    "safe",
    "empty",
    "from_value",
    "from_thunk",
    # Result primitives
    "Result",
    "PendingResult",
    "MaybePending",
    "ok",
    "fail",
    "update",
    "is_pending",
    # Errors
    "ChainError",
    "ErrorInfo",
    "ErrorKind",
    "normalize_error",
    # Collaborators
    "pipe",
    "watch_ok",
    "watch_error",
    "watch_log",
    # Configuration
    "SafechainSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
]
