"""Chainable result wrapper unifying sync and async error handling.

Provides:
- Result: immutable success/failure snapshot (ok / fail constructors)
- update: the fold primitive every chain step goes through
- PendingResult: single-resolution awaitable of a Result
- Chain: fluent handle with map, flat_map, if_ok, watch, if_fail, unwrap, or_else

Example:
    >>> from safechain.monads import from_value
    >>>
    >>> result = (
    ...     from_value(10)
    ...     .map(lambda x: x // 2)
    ...     .if_ok(print)
    ...     .if_fail(lambda e: 0)
    ... )
    >>> assert result.unwrap() == 5
"""

from .chain import Chain, empty, from_thunk, from_value, safe
from .result import MaybePending, PendingResult, Result, fail, ok, update

__all__ = [
    # Core types
    "Result",
    "PendingResult",
    "MaybePending",
    "Chain",
    # Result primitives
    "ok",
    "fail",
    "update",
    # Construction
    "empty",
    "from_value",
    "from_thunk",
    "safe",
]
