"""Chain: immutable fluent handle over a Result or a PendingResult.

Every operation builds a callback over the previous Result and hands it to `update`;
the chain itself never branches on timing. Once a step goes pending, the rest of the
sequence stays pending and `is_ok` / `unwrap()` / `or_else()` return coroutines.

Example:
    >>> from_value(5).map(lambda x: x * 2).map(lambda x: x + 3).unwrap()
    13
    >>> from_thunk(lambda: 1 / 0).or_else(0)
    0
    >>> await from_value(2).map(fetch_double).unwrap()  # fetch_double is async
    4
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, overload

from safechain.errors import ErrorInfo
from safechain.foundation.config import settings_or_defaults
from safechain.runtime.concurrency import detach, is_pending, settle

from .result import MaybePending, PendingResult, Result, ok, update

if TYPE_CHECKING:
    from collections.abc import Awaitable, Coroutine

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger("safechain.chain")


@dataclass(frozen=True, slots=True)
class Chain(Generic[T]):
    """Fluent, immutable wrapper sequencing steps over one Result.

    States: immediate success, immediate failure, pending. Pending is absorbing.

    Error propagation:
        - map / flat_map / if_ok / effect short-circuit on a prior failure
        - a raise or a rejected awaitable inside a callback becomes the chain's failure
        - watch never affects the chain, whatever its consumer does
        - if_fail / catch recover; a failing handler becomes the new failure
    """

    _state: MaybePending[T]

    def _next(self, callback: Callable[[Result[T]], object]) -> Chain[Any]:
        return Chain(update(self._state, callback))

    # ─── Transformations ───────────────────────────────────────────────────

    def map(self, transform: Callable[[T], U]) -> Chain[U]:
        """Apply transform to the value. Skipped on failure.

        An awaitable return makes the chain pending.
        """
        return self._next(lambda prev: transform(prev.unwrap()))

    def flat_map(self, transform: Callable[[T], Chain[U]]) -> Chain[U]:
        """Apply a chain-returning transform and flatten the inner chain."""
        return self._next(lambda prev: transform(prev.unwrap()).unwrap())

    # ─── Side effects ──────────────────────────────────────────────────────

    def if_ok(self, effect_fn: Callable[[T], object]) -> Chain[T]:
        """Run effect_fn for its side effect on success; keep the original value.

        If effect_fn returns an awaitable, the chain waits for it (and fails if it
        fails) but still yields the original value. Skipped on failure.
        """

        def step(prev: Result[T]) -> object:
            value = prev.unwrap()
            outcome = effect_fn(value)
            return _then_value(outcome, value) if is_pending(outcome) else value

        return self._next(step)

    effect = if_ok

    def watch(self, consumer: Callable[[Result[T]], object]) -> Chain[T]:
        """Observe the current Result on both outcomes without affecting the chain.

        Anything consumer raises is swallowed; an awaitable it returns is detached and
        never awaited by the chain.
        """

        def step(prev: Result[T]) -> object:
            try:
                outcome = consumer(prev)
                if is_pending(outcome):
                    detach(outcome)
            except Exception as exc:
                if settings_or_defaults().log_suppressed:
                    logger.debug("watch consumer raised: %s", ErrorInfo.from_exception(exc))
            return prev.unwrap()

        return self._next(step)

    # ─── Recovery ──────────────────────────────────────────────────────────

    def if_fail(self, handler: Callable[[BaseException], U]) -> Chain[T | U]:
        """On failure, recover with handler(error). On success, pass the value through.

        A raise or rejected awaitable from handler becomes the new failure.
        """
        return self._next(lambda prev: prev.value if prev.is_ok else handler(prev.error))  # type: ignore[arg-type]

    catch = if_fail

    # ─── Extraction ────────────────────────────────────────────────────────

    @property
    def is_ok(self) -> bool | Coroutine[Any, Any, bool]:
        """Success flag; a coroutine resolving to it for a pending chain. Never raises."""
        if is_pending(self._state):
            return _pending_is_ok(self._state)
        return self._state.is_ok

    @property
    def pending(self) -> bool:
        """Whether this chain has gone pending."""
        return is_pending(self._state)

    def unwrap(self) -> T | Coroutine[Any, Any, T]:
        """Return the value or raise the normalized error.

        For a pending chain, returns a coroutine resolving to the value or raising.
        """
        if is_pending(self._state):
            return _pending_unwrap(self._state)
        return self._state.unwrap()

    def or_else(self, fallback: U) -> T | U | Coroutine[Any, Any, T | U]:
        """Return the value, or fallback on failure. Never raises.

        The fallback is returned as given, even if it is an awaitable.
        """
        if is_pending(self._state):
            return _pending_or_else(self._state, fallback)
        return self._state.value if self._state.is_ok else fallback

    def __repr__(self) -> str:
        return f"Chain({self._state!r})"


async def _then_value(outcome: Awaitable[object], value: T) -> T:
    await settle(outcome)
    return value


async def _pending_is_ok(state: PendingResult[Any]) -> bool:
    return (await state).is_ok


async def _pending_unwrap(state: PendingResult[T]) -> T:
    return (await state).unwrap()


async def _pending_or_else(state: PendingResult[T], fallback: U) -> T | U:
    result = await state
    return result.value if result.is_ok else fallback  # type: ignore[return-value]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def empty() -> Chain[None]:
    """Immediate success wrapping None."""
    return Chain(ok(None))


def from_value(value: T) -> Chain[T]:
    """Chain over value. An awaitable value yields a pending chain resolving to it."""
    return empty().map(lambda _: value)


def from_thunk(fn: Callable[[], T]) -> Chain[T]:
    """Call fn now and wrap its outcome.

    A raise becomes an immediate failure; an awaitable return becomes a pending chain
    whose rejection only shows through `unwrap()` / `is_ok`.
    """
    return empty().map(lambda _: fn())


@overload
def safe() -> Chain[None]: ...
@overload
def safe(init: Callable[[], T]) -> Chain[T]: ...
@overload
def safe(init: T) -> Chain[T]: ...


def safe(init: object = None) -> Chain[Any]:
    """Build a chain from nothing, a thunk, or a value.

    Examples:
        >>> safe().unwrap() is None
        True
        >>> safe(lambda: 42).unwrap()
        42
        >>> safe(42).unwrap()
        42
    """
    if init is None:
        return empty()
    if callable(init):
        return from_thunk(init)
    return from_value(init)
