"""Tests for reduce."""

from __future__ import annotations

import pytest

from async_af import HOLE, AsyncAF, EmptyReductionError, NotArrayLikeError, NotCallableError, SparseArray
from tests.helpers import Pending, pending_all


@pytest.fixture(params=['settled', 'pending', 'series'])
def chain(request: pytest.FixtureRequest) -> AsyncAF[list[object]]:
    """AsyncAF over [1, 2, 4]: plain, pending, and pending in series."""
    if request.param == 'settled':
        return AsyncAF([1, 2, 4])
    if request.param == 'pending':
        return AsyncAF(pending_all(1, 2, 4))
    return AsyncAF(pending_all(1, 2, 4)).series


class TestReduce:
    """Tests for reduce."""

    async def test_applies_callback_after_first_element(self, chain: AsyncAF[list[object]]) -> None:
        doubled: list[int] = []
        await chain.reduce(lambda _, n: doubled.append(n * 2))
        assert doubled == [4, 8]

    async def test_sums(self, chain: AsyncAF[list[object]]) -> None:
        assert await chain.reduce(lambda total, n: total + n) == 7

    async def test_initial_value(self, chain: AsyncAF[list[object]]) -> None:
        result = await chain.reduce(lambda acc, n, i: {**acc, i: n}, {})
        assert result == {0: 1, 1: 2, 2: 4}

    async def test_pending_initial_value(self) -> None:
        assert await AsyncAF([1, 2]).reduce(lambda acc, n: acc + n, Pending(10)) == 13

    async def test_async_callback_accumulator_is_awaited(self) -> None:
        async def add(acc: int, n: int) -> int:
            return acc + n

        assert await AsyncAF(pending_all(1, 2, 4)).reduce(add, 0) == 7

    async def test_collection_argument_is_original(self) -> None:
        nums = pending_all(1, 2, 4)
        result: list[int] = []

        async def running(_: object, n: int, i: int, arr: list[Pending]) -> None:
            result.append(n + (await arr[i - 1] if i else 0))

        await AsyncAF(nums).reduce(running, None)
        assert result == [1, 3, 6]

    async def test_skips_holes(self) -> None:
        visited: list[int] = []

        def add(acc: int, n: int, i: int) -> int:
            visited.append(i)
            return acc + n

        assert await AsyncAF(SparseArray.of(HOLE, 1, HOLE, 2)).reduce(add) == 3
        assert visited == [3]

    async def test_empty_with_initial_value_skips_callback(self) -> None:
        calls: list[object] = []
        assert await AsyncAF([]).reduce(lambda acc, n: calls.append(n), 'start') == 'start'
        assert calls == []

    async def test_empty_without_initial_value(self) -> None:
        with pytest.raises(EmptyReductionError, match='reduce of empty array with no initial value'):
            await AsyncAF([]).reduce(lambda _, n: n)

    async def test_only_holes_without_initial_value(self) -> None:
        with pytest.raises(EmptyReductionError):
            await AsyncAF([HOLE, HOLE]).reduce(lambda _, n: n)

    async def test_single_element_without_initial_value(self) -> None:
        calls: list[object] = []
        assert await AsyncAF([Pending(9)]).reduce(lambda acc, n: calls.append(n)) == 9
        assert calls == []

    async def test_missing_callback(self) -> None:
        with pytest.raises(NotCallableError, match='None is not a function'):
            await AsyncAF([1, 2]).reduce()

    @pytest.mark.parametrize('value', [None, {}, 3.5])
    async def test_not_array_like(self, value: object) -> None:
        with pytest.raises(NotArrayLikeError, match='reduce cannot be called on'):
            await AsyncAF(value).reduce(lambda _, n: n)

    async def test_reduces_characters_of_str(self) -> None:
        assert await AsyncAF('abc').reduce(lambda acc, ch: ch + acc) == 'cba'

    async def test_element_failure_propagates(self) -> None:
        with pytest.raises(ZeroDivisionError):
            await AsyncAF([Pending(1), Pending(error=ZeroDivisionError())]).reduce(lambda a, b: a + b)
