"""Function composition over chains.

`pipe(f, g, h)` returns a function that seeds a chain with its input and maps each
step in order. It is a plain left fold over `Chain.map`; failures short-circuit and
awaitables turn the rest of the pipeline pending exactly as with hand-written chains.

Example:
    >>> inc_then_double = pipe(lambda x: x + 1, lambda x: x * 2)
    >>> inc_then_double(5).unwrap()
    12
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable

from safechain.monads import Chain, from_value

Step = Callable[[Any], Any]


def pipe(*steps: Step) -> Callable[[Any], Chain[Any]]:
    """Compose steps left to right into one chain-returning function."""

    def run(value: Any) -> Chain[Any]:
        return reduce(Chain.map, steps, from_value(value))

    return run
