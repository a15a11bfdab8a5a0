"""
Awaitable versions of the CPS operations.

Each coroutine starts the matching callback-based operation on the running
loop and resolves with the value its callback receives:

    total = await aio.reduce([1, 2, 3], add, 0)
    evens = await aio.filter(range(10), is_even)

Workers keep the continuation-passing signature. A worker that never
continues leaves the await pending forever. An exception raised by a worker
fails the await with that exception and is re-raised where the worker ran,
so the event loop's exception handler still sees it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Sequence, TypeVar

from . import engine, primitives
from .config import FoldConfig
from .engine import MISSING, Worker
from .primitives import EachWorker, ItemWorker

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., None])


class _Outcome:
    """Future that a fold's callback or a failing worker settles."""

    def __init__(self):
        self.future = asyncio.get_running_loop().create_future()

    def resolve(self, value: Any) -> None:
        if not self.future.done():
            self.future.set_result(value)

    def guard(self, fn: F | None) -> F | None:
        if fn is None:
            return None

        def guarded(*args: Any) -> None:
            try:
                fn(*args)
            except Exception as exc:
                if not self.future.done():
                    self.future.set_exception(exc)
                raise

        return guarded  # type: ignore[return-value]


async def reduce(
    items: Sequence[T],
    worker: Worker,
    initial: Any = MISSING,
    *,
    config: FoldConfig | None = None,
) -> Any:
    """Await the result of engine.reduce."""
    outcome = _Outcome()
    engine.reduce(
        items, outcome.guard(worker), outcome.resolve, initial, config=config
    )
    return await outcome.future


fold = reduce


async def map(
    items: Sequence[T], worker: ItemWorker, *, config: FoldConfig | None = None
) -> list:
    outcome = _Outcome()
    primitives.map(items, outcome.guard(worker), outcome.resolve, config=config)
    return await outcome.future


async def filter(
    items: Sequence[T], predicate: ItemWorker, *, config: FoldConfig | None = None
) -> list[T]:
    outcome = _Outcome()
    primitives.filter(items, outcome.guard(predicate), outcome.resolve, config=config)
    return await outcome.future


async def for_each(
    items: Sequence[T], worker: EachWorker, *, config: FoldConfig | None = None
) -> Sequence[T]:
    outcome = _Outcome()
    primitives.for_each(items, outcome.guard(worker), outcome.resolve, config=config)
    return await outcome.future


async def every(
    items: Sequence[T],
    predicate: ItemWorker | None = None,
    *,
    config: FoldConfig | None = None,
) -> bool:
    outcome = _Outcome()
    primitives.every(items, outcome.guard(predicate), outcome.resolve, config=config)
    return await outcome.future


async def some(
    items: Sequence[T],
    predicate: ItemWorker | None = None,
    *,
    config: FoldConfig | None = None,
) -> bool:
    outcome = _Outcome()
    primitives.some(items, outcome.guard(predicate), outcome.resolve, config=config)
    return await outcome.future
