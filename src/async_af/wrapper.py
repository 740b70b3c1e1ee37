"""AsyncAF: chainable, awaitable wrapper exposing the async array methods.

AsyncAF wraps a value (or an awaitable producing one). Each method returns a
new AsyncAF wrapping the method's coroutine, so calls chain and nothing runs
until the chain is awaited.

Example:
    ```python
    async def fetch(n: int) -> int:
        return n

    async def main():
        nums = [fetch(1), fetch(2), fetch(3)]
        total = await (
            AsyncAF(nums)
            .map(lambda n: n * 2)
            .filter(lambda n: n > 2)
            .reduce(lambda acc, n: acc + n)
        )
        assert total == 10
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

from async_af import itertools as af
from async_af._internal.callback import NO_RECEIVER
from async_af.resolve import Mode, settle, strategy_for

__all__ = ['AsyncAF']

_MISSING: Any = object()


class AsyncAF[T]:
    """Awaitable wrapper whose methods mirror the native array methods.

    Elements are settled in parallel by default. Going through .series (or
    its alias .io) runs only the next method in series: elements are settled
    one at a time in index order, and some/every/find/find_index/includes/
    index_of/last_index_of stop as soon as the answer is known.

    Note:
        AsyncAF is single-shot when wrapping a coroutine object. Coroutines
        can only be awaited once, so awaiting the same AsyncAF (or two chains
        built from it) twice raises RuntimeError. Wrap a plain value or a
        Task/Future for multi-await scenarios.

    Attributes:
        _value: The wrapped value or awaitable.
        _in_series: Whether the next method settles elements in series.
    """

    __slots__ = ('_in_series', '_value')

    def __init__(self, value: T | Awaitable[T] = None, *, in_series: bool = False) -> None:
        """Create an AsyncAF.

        Args:
            value: The collection to wrap, or an awaitable producing it.
            in_series: Run the next method in series instead of in parallel.
        """
        self._value = value
        self._in_series = in_series

    def __await__(self) -> Generator[Any, Any, T]:
        """Support await syntax to get the settled wrapped value."""
        return settle(self._value).__await__()

    @property
    def in_series(self) -> bool:
        """True if the next method settles elements one at a time."""
        return self._in_series

    @property
    def series(self) -> AsyncAF[T]:
        """Wrapper whose next method runs in series.

        Example:
            ```python
            async def example():
                # stops settling at the first even number
                assert await AsyncAF([1, 2, 3]).series.some(lambda n: n % 2 == 0)
            ```
        """
        return AsyncAF(self._value, in_series=True)

    io = series

    def _then[U](self, adapter: Callable[..., Coroutine[Any, Any, U]], *args: Any) -> AsyncAF[U]:
        strategy = strategy_for(Mode.SERIES if self._in_series else Mode.PARALLEL)

        async def _run() -> U:
            value = await settle(self._value)
            return await adapter(value, *args, strategy=strategy)

        return AsyncAF(_run())

    def for_each(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[None]:
        """Call callback(element, index, collection) for every element; resolves to None.

        Example:
            ```python
            async def example():
                seen = []
                await AsyncAF([1, 2, 3]).for_each(seen.append)
                assert seen == [1, 2, 3]
            ```
        """
        return self._then(af.for_each, callback, this_arg)

    def map(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[Any]:
        """Resolve to the list of settled callback results."""
        return self._then(af.map, callback, this_arg)

    def filter(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[list[Any]]:
        """Resolve to the settled elements whose callback result is truthy."""
        return self._then(af.filter, callback, this_arg)

    def some(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[bool]:
        """Resolve to True if the callback is truthy for any element."""
        return self._then(af.some, callback, this_arg)

    def every(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[bool]:
        """Resolve to True if the callback is truthy for every element."""
        return self._then(af.every, callback, this_arg)

    def find(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[Any]:
        """Resolve to the first element the callback accepts, or None."""
        return self._then(af.find, callback, this_arg)

    def find_index(self, callback: Callable[..., Any] | None = None, this_arg: Any = NO_RECEIVER) -> AsyncAF[int]:
        """Resolve to the index of the first element the callback accepts, or -1."""
        return self._then(af.find_index, callback, this_arg)

    def reduce(self, callback: Callable[..., Any] | None = None, initial: Any = _MISSING) -> AsyncAF[Any]:
        """Resolve to the elements folded with callback(accumulator, element, index, collection).

        Example:
            ```python
            async def example():
                assert await AsyncAF([1, 2, 4]).reduce(lambda acc, n: acc + n) == 7
            ```
        """
        if initial is _MISSING:
            return self._then(af.reduce, callback)
        return self._then(af.reduce, callback, initial)

    def includes(self, search_item: Any, from_index: int = 0) -> AsyncAF[bool]:
        """Resolve to True if search_item is present (same-value-zero), from from_index on."""
        return self._then(af.includes, search_item, from_index)

    def index_of(self, search_item: Any, from_index: int = 0) -> AsyncAF[int]:
        """Resolve to the first index of search_item at or after from_index, or -1."""
        return self._then(af.index_of, search_item, from_index)

    def last_index_of(self, search_item: Any, from_index: int | None = None) -> AsyncAF[int]:
        """Resolve to the last index of search_item at or before from_index, or -1."""
        return self._then(af.last_index_of, search_item, from_index)

    def join(self, separator: str | None = ',') -> AsyncAF[str]:
        """Resolve to the settled elements joined by separator."""
        return self._then(af.join, separator)

    def concat(self, *values: Any) -> AsyncAF[Any]:
        """Resolve to the settled elements followed by the settled values."""
        return self._then(af.concat, *values)

    def split(self, separator: str | None = None, limit: int | None = None) -> AsyncAF[list[str]]:
        """Resolve to the wrapped str split on separator, at most limit pieces."""
        return self._then(af.split, separator, limit)

    def __repr__(self) -> str:
        mode = 'series' if self._in_series else 'parallel'
        return f'AsyncAF({self._value!r}, {mode})'
