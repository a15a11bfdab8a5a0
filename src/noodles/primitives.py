"""
Continuation-passing map, filter, for_each, every and some.

Each one is a thin layer over engine.reduce with its own seed and a wrapper
around the caller's worker. Workers receive the item and a ``returns``
continuation:

    def square(n, returns):
        returns(n * n)

    map([1, 2, 3], square, print)   # prints [1, 4, 9]
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Sequence, TypeVar

from .config import FoldConfig
from .engine import Callback, reduce

T = TypeVar("T")

Returns = Callable[[Any], None]
ItemWorker = Callable[[T, Returns], None]
EachWorker = Callable[[T, int, Callable[[], None], Callable[[], None]], None]


def _truthy(item: Any, returns: Returns) -> None:
    returns(bool(item))


def map(
    items: Sequence[T],
    worker: ItemWorker,
    callback: Callback | None = None,
    *,
    config: FoldConfig | None = None,
) -> None:
    """
    Collect ``worker(item, returns)`` results in item order.

    Example:
        def read(path, returns):
            loop.run_in_executor(None, Path(path).read_text).add_done_callback(
                lambda f: returns(f.result())
            )

        map(["a.txt", "b.txt"], read, handle_bodies)
    """

    def step(results: list, item: T, proceed, finish) -> None:
        def returns(value: Any) -> None:
            results.append(value)
            proceed(results)

        worker(item, returns)

    reduce(items, step, callback, [], config=config)


def filter(
    items: Sequence[T],
    predicate: ItemWorker,
    callback: Callback | None = None,
    *,
    config: FoldConfig | None = None,
) -> None:
    """Keep the items for which ``predicate(item, returns)`` returns truthy."""

    def step(kept: list, item: T, proceed, finish) -> None:
        def returns(keep: Any) -> None:
            if keep:
                kept.append(item)
            proceed(kept)

        predicate(item, returns)

    reduce(items, step, callback, [], config=config)


def for_each(
    items: Sequence[T],
    worker: EachWorker,
    callback: Callback | None = None,
    *,
    config: FoldConfig | None = None,
) -> None:
    """
    Call ``worker(item, index, proceed, exit)`` on every item for side effects.

    ``proceed()`` and ``exit()`` take no arguments. The worker must still call
    ``proceed()`` for iteration to continue; ``exit()`` stops early and still
    fires ``callback``. Calling neither means ``callback`` never runs.
    ``callback`` receives ``items`` itself.
    """
    index = 0

    def step(_: None, item: T, proceed, finish) -> None:
        nonlocal index
        position = index
        index += 1
        worker(item, position, partial(proceed, None), partial(finish, None))

    def done(_: None) -> None:
        if callback is not None:
            callback(items)

    reduce(items, step, done, None, config=config)


def every(
    items: Sequence[T],
    predicate: ItemWorker | None = None,
    callback: Callback | None = None,
    *,
    config: FoldConfig | None = None,
) -> None:
    """
    Report whether ``predicate`` holds for every item.

    Stops at the first falsy result. An empty sequence is vacuously True and
    the predicate is never called. Without a predicate the items' own
    truthiness is tested.
    """
    test = predicate if predicate is not None else _truthy

    def step(_: bool, item: T, proceed, finish) -> None:
        def returns(passed: Any) -> None:
            if passed:
                proceed(True)
            else:
                finish(False)

        test(item, returns)

    reduce(items, step, callback, True, config=config)


def some(
    items: Sequence[T],
    predicate: ItemWorker | None = None,
    callback: Callback | None = None,
    *,
    config: FoldConfig | None = None,
) -> None:
    """
    Report whether ``predicate`` holds for at least one item.

    Stops at the first truthy result; an empty sequence gives False.
    """
    test = predicate if predicate is not None else _truthy

    def step(_: bool, item: T, proceed, finish) -> None:
        def returns(passed: Any) -> None:
            if passed:
                finish(True)
            else:
                proceed(False)

        test(item, returns)

    reduce(items, step, callback, False, config=config)
