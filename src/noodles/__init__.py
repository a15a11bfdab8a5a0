"""
Noodles: non-blocking, continuation-passing folds over in-memory sequences.

Provides reduce, map, filter, for_each, every and some. Each item is handed
to a worker together with continuations, so workers may finish synchronously
or after their own async I/O. Long synchronous runs are split into bursts
with yields back to the event loop in between.

Usage:
    from noodles import reduce, map, every

    # Sum, delivered to the callback on a later loop turn
    reduce(items, lambda total, n, proceed, finish: proceed(total + n), on_sum, 0)

    # Awaitable form
    from noodles import aio
    squares = await aio.map(items, lambda n, returns: returns(n * n))

    # Method-call form
    noodles(items).some(is_even, on_result)
"""

from . import aio
from .chain import Noodle, noodles
from .config import (
    AsyncioScheduler,
    Clock,
    FoldConfig,
    Scheduler,
    configure,
    get_config,
    reset_config,
)
from .engine import fold, reduce
from .exceptions import ConfigurationError, EmptySequenceError, NoodlesError
from .primitives import every, filter, for_each, map, some

__version__ = "0.1.0"
__all__ = [
    # Fold engine
    "reduce",
    "fold",
    # Combinators (built on reduce)
    "map",
    "filter",
    "for_each",
    "every",
    "some",
    # Wrappers
    "Noodle",
    "noodles",
    "aio",
    # Configuration
    "FoldConfig",
    "Scheduler",
    "Clock",
    "AsyncioScheduler",
    "configure",
    "get_config",
    "reset_config",
    # Errors
    "NoodlesError",
    "ConfigurationError",
    "EmptySequenceError",
]
