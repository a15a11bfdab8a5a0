"""
Timing configuration for the fold engine.

Two tunables govern scheduling: how long a deferred continuation waits before
it runs, and how long one synchronous burst of items may run before the
engine yields back to the event loop. Both live on a FoldConfig together with
the scheduler and clock the engine uses, so tests can swap in virtual time.

A process-wide default instance is used by every fold that is not given its
own config:

    import noodles

    noodles.configure(batch_time_ms=10)
    noodles.reduce(items, worker, callback, 0)        # uses the new default
    noodles.reduce(items, worker, callback, 0,
                   config=noodles.FoldConfig(batch_time_ms=100))
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Protocol

from .exceptions import ConfigurationError

DEFAULT_YIELD_DELAY_MS = 15.0
DEFAULT_BATCH_TIME_MS = 50.0


class Scheduler(Protocol):
    """Runs ``callback`` on a later scheduler turn, ``delay_ms`` from now."""

    def __call__(self, callback: Callable[[], None], delay_ms: float) -> None: ...


class Clock(Protocol):
    """Returns a monotonic timestamp in seconds."""

    def __call__(self) -> float: ...


class AsyncioScheduler:
    """
    Defers callbacks with ``loop.call_later``.

    Without an explicit loop, the loop running at call time is used, so the
    default scheduler must be invoked from inside a running event loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def __call__(self, callback: Callable[[], None], delay_ms: float) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(delay_ms / 1000.0, callback)

    def __repr__(self) -> str:
        return f"AsyncioScheduler(loop={self._loop!r})"


@dataclass(frozen=True)
class FoldConfig:
    """
    Scheduling settings for one or more folds.

    Attributes:
        yield_delay_ms: Delay before a deferred continuation runs.
        batch_time_ms: Longest synchronous burst before a forced yield.
        scheduler: Defers a zero-argument callback by a delay in ms.
        clock: Monotonic time source in seconds.
    """

    yield_delay_ms: float = DEFAULT_YIELD_DELAY_MS
    batch_time_ms: float = DEFAULT_BATCH_TIME_MS
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    clock: Clock = time.monotonic

    def __post_init__(self) -> None:
        if self.yield_delay_ms < 0:
            raise ConfigurationError(
                f"yield_delay_ms must be >= 0, got {self.yield_delay_ms!r}"
            )
        if self.batch_time_ms < 0:
            raise ConfigurationError(
                f"batch_time_ms must be >= 0, got {self.batch_time_ms!r}"
            )
        if not callable(self.scheduler):
            raise ConfigurationError("scheduler must be callable")
        if not callable(self.clock):
            raise ConfigurationError("clock must be callable")


_default_config = FoldConfig()


def get_config() -> FoldConfig:
    """Return the process-wide default config."""
    return _default_config


def configure(**overrides) -> FoldConfig:
    """
    Replace the process-wide default with a copy carrying ``overrides``.

    Folds running without an explicit config pick the change up at their
    next timing check.
    """
    global _default_config
    try:
        _default_config = replace(_default_config, **overrides)
    except TypeError as exc:
        raise ConfigurationError(str(exc)) from exc
    return _default_config


def reset_config() -> FoldConfig:
    """Restore the built-in defaults."""
    global _default_config
    _default_config = FoldConfig()
    return _default_config
