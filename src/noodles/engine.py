"""
Time-budgeted, continuation-passing fold.

reduce() walks a sequence left to right, handing each item to a worker
together with two continuations:

    def add(total, n, proceed, finish):
        proceed(total + n)

    reduce([1, 2, 3], add, print, 0)   # prints 6 on a later loop turn

The worker calls ``proceed(acc)`` to move on to the next item or
``finish(acc)`` to stop early; it may do so right away or after its own
asynchronous work. Exactly one of them must be called exactly once per
invocation. A worker that calls neither stalls the fold forever, and one that
calls both, or calls one twice, gets undefined results. None of this is
checked at runtime.

The engine never runs a worker in the caller's turn. The first step is
always deferred through the scheduler, and once a synchronous burst has run
longer than ``batch_time_ms`` (and has handled at least one item) the engine
defers again and resumes at the same position with the same accumulator.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Sequence, TypeVar

from .config import FoldConfig, get_config
from .exceptions import EmptySequenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")

Proceed = Callable[[A], None]
Finish = Callable[[A], None]
Worker = Callable[[A, T, Proceed, Finish], None]
Callback = Callable[[A], None]


class _Missing:
    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Any = _Missing()


def _noop(_value: Any) -> None:
    pass


class _Fold(Generic[T, A]):
    """
    State of one in-flight fold.

    The driver loop trampolines synchronous ``proceed`` calls: while a worker
    runs under ``_drive`` a ``proceed`` only records the new accumulator, and
    the loop picks it up once the worker returns. A ``proceed`` arriving later
    (from the worker's own async callback) restarts the loop directly.
    """

    def __init__(
        self,
        items: tuple[T, ...],
        worker: Worker,
        callback: Callback,
        accumulator: A,
        start: int,
        config: FoldConfig | None,
    ):
        self._items = items
        self._worker = worker
        self._callback = callback
        self._acc = accumulator
        self._start = start
        self._index = start
        self._config = config
        self._burst_start = 0.0
        self._iterated_once = False
        self._running = False
        self._pending = False

    @property
    def config(self) -> FoldConfig:
        return self._config if self._config is not None else get_config()

    def schedule(self) -> None:
        config = self.config
        config.scheduler(self._resume, config.yield_delay_ms)

    def _resume(self) -> None:
        self._burst_start = self.config.clock()
        self._iterated_once = False
        self._drive()

    def _proceed(self, accumulator: A) -> None:
        self._acc = accumulator
        if self._running:
            self._pending = True
        else:
            self._drive()

    def _finish(self, accumulator: A) -> None:
        logger.debug(
            "Fold exited early after %d item(s)", self._index - self._start
        )
        self._callback(accumulator)

    def _budget_spent(self) -> bool:
        config = self.config
        elapsed_ms = (config.clock() - self._burst_start) * 1000.0
        return elapsed_ms > config.batch_time_ms and self._iterated_once

    def _drive(self) -> None:
        self._running = True
        try:
            while True:
                if self._budget_spent():
                    logger.debug(
                        "Fold yielding at item %d/%d", self._index, len(self._items)
                    )
                    self.schedule()
                    return

                if self._index >= len(self._items):
                    logger.debug("Fold completed over %d item(s)", len(self._items))
                    self._callback(self._acc)
                    return

                self._iterated_once = True
                item = self._items[self._index]
                self._index += 1
                self._pending = False
                self._worker(self._acc, item, self._proceed, self._finish)
                if not self._pending:
                    # Worker will continue (or finished) on its own.
                    return
        finally:
            self._running = False


def reduce(
    items: Sequence[T],
    worker: Worker,
    callback: Callback | None = None,
    initial: A = MISSING,
    *,
    config: FoldConfig | None = None,
) -> None:
    """
    Fold ``items`` left to right through ``worker``.

    Args:
        items: Sequence to fold. It is copied, so later mutation by the
               caller does not affect a running fold.
        worker: ``worker(acc, item, proceed, finish)``.
        callback: Receives the final accumulator, exactly once.
        initial: Seed accumulator. When omitted the first item is the seed
                 and folding starts at the second item.
        config: Timing settings for this fold only. When omitted the
                process-wide default is read at every timing check.

    Raises:
        EmptySequenceError: ``items`` is empty and no ``initial`` was given.
    """
    snapshot = tuple(items)
    if initial is MISSING:
        if not snapshot:
            raise EmptySequenceError("reduce of empty sequence with no initial value")
        accumulator, start = snapshot[0], 1
    else:
        accumulator, start = initial, 0

    fold_run = _Fold(
        snapshot,
        worker,
        callback if callback is not None else _noop,
        accumulator,
        start,
        config,
    )
    logger.debug("Fold scheduled over %d item(s)", len(snapshot))
    fold_run.schedule()


fold = reduce
