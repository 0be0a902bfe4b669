"""Observer helpers for Chain.watch.

Each helper turns a narrower consumer into a full-Result consumer. Whatever the wrapped
consumer raises or returns is still isolated by `watch`.

Example:
    >>> chain.watch(watch_error(lambda e: errors.append(e)))
    >>> chain.watch(watch_ok(print))
    >>> chain.watch(watch_log(logging.getLogger("app.orders")))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from safechain.errors import ErrorInfo

if TYPE_CHECKING:
    from safechain.monads import Result

T = TypeVar("T")

Consumer = Callable[[Any], object]


def watch_ok(consumer: Callable[[T], object]) -> Consumer:
    """Call consumer(value) only when the Result is a success."""

    def observe(result: Result[T]) -> object:
        return consumer(result.value) if result.is_ok else None  # type: ignore[arg-type]

    return observe


def watch_error(consumer: Callable[[BaseException], object]) -> Consumer:
    """Call consumer(error) only when the Result is a failure."""

    def observe(result: Result[object]) -> object:
        return None if result.is_ok else consumer(result.error)  # type: ignore[arg-type]

    return observe


def watch_log(
    logger: logging.Logger | None = None,
    *,
    level: int = logging.DEBUG,
    error_level: int = logging.WARNING,
    event: str = "chain step",
) -> Consumer:
    """Log each observed Result: successes at level, failures at error_level."""
    log = logger or logging.getLogger("safechain.watch")

    def observe(result: Result[object]) -> None:
        if result.is_ok:
            log.log(level, "%s ok: %r", event, result.value)
        else:
            log.log(error_level, "%s failed: %s", event, ErrorInfo.from_exception(result.error))  # type: ignore[arg-type]

    return observe
