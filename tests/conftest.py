"""Deterministic clock and scheduler for driving folds without real time."""

from collections import deque

import pytest

import noodles
from noodles import FoldConfig


class VirtualClock:
    """Monotonic clock in seconds that only moves when told to."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class ManualScheduler:
    """Queues deferred callbacks; ``run()`` drains them in FIFO order."""

    def __init__(self, clock: VirtualClock):
        self._clock = clock
        self._queue = deque()
        self.deferred = 0
        self.delays = []

    def __call__(self, callback, delay_ms: float) -> None:
        self.deferred += 1
        self.delays.append(delay_ms)
        self._queue.append((callback, delay_ms))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_one(self) -> None:
        callback, delay_ms = self._queue.popleft()
        self._clock.advance_ms(delay_ms)
        callback()

    def run(self, limit: int = 100_000) -> int:
        turns = 0
        while self._queue:
            if turns >= limit:
                raise AssertionError("scheduler did not drain")
            self.run_one()
            turns += 1
        return turns


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def config(clock, scheduler):
    return FoldConfig(scheduler=scheduler, clock=clock)


@pytest.fixture(autouse=True)
def _restore_default_config():
    yield
    noodles.reset_config()


class Recorder:
    """Callback that records every value it receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)

    @property
    def value(self):
        assert len(self.calls) == 1, f"expected one call, got {self.calls!r}"
        return self.calls[0]


@pytest.fixture
def recorder():
    return Recorder()
