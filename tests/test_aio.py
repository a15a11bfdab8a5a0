"""Tests for the awaitable facade."""

import asyncio

import pytest

from noodles import EmptySequenceError, FoldConfig, aio

FAST = FoldConfig(yield_delay_ms=0)


def add(total, n, proceed, finish):
    proceed(total + n)


def square(n, returns):
    returns(n * n)


def is_even(n, returns):
    returns(n % 2 == 0)


class TestAio:
    @pytest.mark.asyncio
    async def test_reduce(self):
        assert await aio.reduce([1, 2, 3, 4, 5], add, 0, config=FAST) == 15

    @pytest.mark.asyncio
    async def test_reduce_without_seed(self):
        assert await aio.fold(["a", "b", "c"], add, config=FAST) == "abc"

    @pytest.mark.asyncio
    async def test_reduce_empty_without_seed(self):
        with pytest.raises(EmptySequenceError):
            await aio.reduce([], add, config=FAST)

    @pytest.mark.asyncio
    async def test_map(self):
        assert await aio.map([1, 2, 3, 4, 5], square, config=FAST) == [1, 4, 9, 16, 25]

    @pytest.mark.asyncio
    async def test_filter(self):
        result = await aio.filter(range(1, 10), is_even, config=FAST)
        assert result == [2, 4, 6, 8]

    @pytest.mark.asyncio
    async def test_for_each(self):
        items = ["x", "y"]
        seen = []

        def visit(item, index, proceed, exit):
            seen.append((index, item))
            proceed()

        assert await aio.for_each(items, visit, config=FAST) is items
        assert seen == [(0, "x"), (1, "y")]

    @pytest.mark.asyncio
    async def test_every_and_some(self):
        assert await aio.every([2, 4, 6, 8], is_even, config=FAST) is True
        assert await aio.some([1, 3, 5, 7, 9], is_even, config=FAST) is False
        assert await aio.every([], config=FAST) is True
        assert await aio.some([], config=FAST) is False

    @pytest.mark.asyncio
    async def test_worker_with_own_async_io(self):
        loop = asyncio.get_running_loop()

        def delayed_square(n, returns):
            loop.call_later(0.001, returns, n * n)

        assert await aio.map([1, 2, 3], delayed_square, config=FAST) == [1, 4, 9]

    @pytest.mark.asyncio
    async def test_concurrent_folds_are_independent(self):
        loop = asyncio.get_running_loop()

        def delayed_add(total, n, proceed, finish):
            loop.call_later(0.001, proceed, total + n)

        first, second = await asyncio.gather(
            aio.reduce(range(10), delayed_add, 0, config=FAST),
            aio.reduce(range(10, 20), delayed_add, 0, config=FAST),
        )
        assert first == sum(range(10))
        assert second == sum(range(10, 20))


class TestAioErrors:
    @pytest.mark.asyncio
    async def test_worker_error_fails_the_await(self):
        seen = []

        def broken(total, n, proceed, finish):
            seen.append(n)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await asyncio.wait_for(aio.reduce([1, 2], broken, 0, config=FAST), timeout=5)
        assert seen == [1]

    @pytest.mark.asyncio
    async def test_predicate_error_fails_the_await(self):
        def broken(n, returns):
            if n == 3:
                raise KeyError(n)
            is_even(n, returns)

        with pytest.raises(KeyError):
            await asyncio.wait_for(aio.every([2, 4, 3, 6], broken, config=FAST), timeout=5)
        with pytest.raises(KeyError):
            await asyncio.wait_for(aio.filter([1, 2, 3], broken, config=FAST), timeout=5)

    @pytest.mark.asyncio
    async def test_map_error_after_async_step(self):
        loop = asyncio.get_running_loop()

        def flaky(n, returns):
            if n == 2:
                raise ValueError("bad item")
            loop.call_later(0.001, returns, n)

        with pytest.raises(ValueError, match="bad item"):
            await asyncio.wait_for(aio.map([1, 2, 3], flaky, config=FAST), timeout=5)
