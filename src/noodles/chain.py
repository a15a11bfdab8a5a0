"""Method-call style wrapper: ``noodles(items).map(square, callback)``."""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from . import engine, primitives
from .config import FoldConfig
from .engine import MISSING, Callback, Worker
from .primitives import EachWorker, ItemWorker

T = TypeVar("T")


class Noodle(Generic[T]):
    """
    Binds a sequence (and optionally a FoldConfig) to the CPS operations.

    Example:
        noodles([1, 2, 3, 4]).reduce(
            lambda total, n, proceed, finish: proceed(total + n),
            print,
            0,
        )
    """

    def __init__(self, items: Sequence[T], config: FoldConfig | None = None):
        self.items = items
        self.config = config

    def reduce(
        self,
        worker: Worker,
        callback: Callback | None = None,
        initial: Any = MISSING,
    ) -> None:
        engine.reduce(self.items, worker, callback, initial, config=self.config)

    def map(self, worker: ItemWorker, callback: Callback | None = None) -> None:
        primitives.map(self.items, worker, callback, config=self.config)

    def filter(
        self, predicate: ItemWorker, callback: Callback | None = None
    ) -> None:
        primitives.filter(self.items, predicate, callback, config=self.config)

    def for_each(self, worker: EachWorker, callback: Callback | None = None) -> None:
        primitives.for_each(self.items, worker, callback, config=self.config)

    def every(
        self, predicate: ItemWorker | None = None, callback: Callback | None = None
    ) -> None:
        primitives.every(self.items, predicate, callback, config=self.config)

    def some(
        self, predicate: ItemWorker | None = None, callback: Callback | None = None
    ) -> None:
        primitives.some(self.items, predicate, callback, config=self.config)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Noodle({self.items!r})"


def noodles(items: Sequence[T], config: FoldConfig | None = None) -> Noodle[T]:
    """Wrap ``items`` for method-call style folding."""
    return Noodle(items, config)
