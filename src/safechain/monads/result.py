"""Result container and the update/fold primitive behind every chain step.

A Result is an immutable success/failure snapshot. `update` applies a callback to a
Result (or to an awaitable of one) and folds whatever the callback produced back into
Result form:

    plain return   -> ok(value)
    raise          -> fail(exc)
    awaitable      -> PendingResult resolving to ok(resolved) / fail(exc)

Once the input is pending, the output is pending.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from safechain.errors import normalize_error
from safechain.runtime.concurrency import is_pending, settle

if TYPE_CHECKING:
    from collections.abc import Awaitable, Coroutine, Generator

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Discriminated union: success holds `value`, failure holds `error`.

    Examples:
        >>> ok(42)
        Ok(42)
        >>> fail("boom").error
        ChainError('boom', kind=STRING)
    """

    is_ok: bool
    value: T | None = None
    error: BaseException | None = None

    def unwrap(self) -> T:
        """Return the value, or raise the error."""
        if self.is_ok:
            return self.value  # type: ignore[return-value]
        raise self.error  # type: ignore[misc]

    def __bool__(self) -> bool:
        return self.is_ok

    def __repr__(self) -> str:
        return f"Ok({self.value!r})" if self.is_ok else f"Err({self.error!r})"


def ok(value: T) -> Result[T]:
    """Construct a success Result carrying value unchanged."""
    return Result(True, value, None)


def fail(error: object) -> Result[Any]:
    """Construct a failure Result; error is normalized first."""
    return Result(False, None, normalize_error(error))


# ═══════════════════════════════════════════════════════════════════════════════
# Pending results
# ═══════════════════════════════════════════════════════════════════════════════


class PendingResult(Generic[T]):
    """Single-resolution awaitable of a Result, readable any number of times.

    Created inside a running loop, the work starts immediately as a task; otherwise it
    starts on first await. Awaiting never raises a chain failure, only returns the
    Result. Readers are shielded: cancelling one reader does not cancel the work.
    """

    __slots__ = ("_factory", "_future")

    def __init__(self, factory: Callable[[], Coroutine[Any, Any, Result[T]]]) -> None:
        self._factory = factory
        self._future: asyncio.Future[Result[T]] | None = None
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._start()

    def _start(self) -> asyncio.Future[Result[T]]:
        if self._future is None:
            self._future = asyncio.ensure_future(self._factory())
        return self._future

    def done(self) -> bool:
        """Whether the Result is already available."""
        return self._future is not None and self._future.done()

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return asyncio.shield(self._start()).__await__()

    def __repr__(self) -> str:
        if self.done():
            return f"PendingResult({self._future.result()!r})"  # type: ignore[union-attr]
        return "PendingResult(<pending>)"


MaybePending = Result[T] | PendingResult[T]


# ═══════════════════════════════════════════════════════════════════════════════
# Fold primitive
# ═══════════════════════════════════════════════════════════════════════════════


def update(
    prev: Result[T] | Awaitable[Result[T]],
    callback: Callable[[Result[T]], U],
) -> Result[Any] | PendingResult[Any]:
    """Apply callback to prev and fold its outcome into Result form.

    The callback always receives the full previous Result, so chain operations differ
    only in the callback they pass here.
    """
    if is_pending(prev):
        return PendingResult(partial(_after, prev, callback))
    try:
        outcome = callback(prev)  # type: ignore[arg-type]
    except Exception as exc:
        return fail(exc)
    if is_pending(outcome):
        return PendingResult(partial(_fold, outcome))
    return ok(outcome)


async def _after(prev: Awaitable[Result[T]], callback: Callable[[Result[T]], U]) -> Result[Any]:
    try:
        resolved = await prev
    except Exception as exc:
        return fail(exc)
    nxt = update(resolved, callback)
    return await nxt if is_pending(nxt) else nxt  # type: ignore[return-value]


async def _fold(outcome: Awaitable[object]) -> Result[Any]:
    try:
        return ok(await settle(outcome))
    except Exception as exc:
        return fail(exc)
