"""Async counterparts of the native array iteration methods.

Each adapter takes a settled collection whose elements may still be pending,
checks that it is array-like, settles its elements through a resolution
strategy and then replays the contract of the matching synchronous method:
same results, same hole handling, same errors.

Collections are never mutated; adapters build new lists (or strings) from
the settled values.

Example:
    ```python
    async def fetch(n: int) -> int:
        return n

    async def example():
        nums = [fetch(1), fetch(2), fetch(3)]
        assert await some(nums, lambda n: n % 2 == 0) is True
    ```
"""

from __future__ import annotations

import math
from collections.abc import Callable
from contextlib import aclosing
from typing import Any

from async_af._internal.array_like import ArrayView, check_callable, check_str, is_array_like, view_of
from async_af._internal.callback import NO_RECEIVER, bind_callback
from async_af.errors import EmptyReduction
from async_af.resolve import Parallel, ResolutionStrategy, gather, settle
from async_af.sparse import HOLE, SparseArray

__all__ = [
    'concat',
    'every',
    'filter',
    'find',
    'find_index',
    'for_each',
    'includes',
    'index_of',
    'join',
    'last_index_of',
    'map',
    'reduce',
    'some',
    'split',
]

_MISSING: Any = object()
PARALLEL = Parallel()


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def same_value_zero(a: Any, b: Any) -> bool:
    """Equality that treats NaN as equal to itself."""
    return bool(a == b) or (_is_nan(a) and _is_nan(b))


def strict_equals(a: Any, b: Any) -> bool:
    """Plain equality without the identity shortcut, so NaN never matches."""
    return bool(a == b)


def _callback_for(callback: Any, this_arg: Any) -> Callable[..., Any]:
    error = check_callable(callback)
    if error is not None:
        raise error.to_exception()
    return bind_callback(callback, this_arg)


def _start_index(from_index: int, length: int) -> int:
    start = int(from_index)
    if start < 0:
        return max(length + start, 0)
    return start


async def for_each(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> None:
    """Call callback(element, index, collection) for every assigned element.

    In parallel mode every callback is started before any awaitable result
    is awaited; in series mode each callback finishes before the next element
    is settled.

    Args:
        value: Array-like collection, elements possibly pending.
        callback: Called with the settled element, its index and the collection.
        this_arg: Explicit receiver (None included) passed as the callback's first
            argument, shifting element, index and collection one place right.
            A callback that takes a single parameter then receives this_arg
            instead of the element.
        strategy: Resolution strategy (parallel by default).

    Raises:
        NotArrayLikeError: If value is not array-like.
        NotCallableError: If callback is missing or not callable.
    """
    view = view_of(value, 'for_each')
    fn = _callback_for(callback, this_arg)
    await strategy.apply(view, lambda i, el: fn(el, i, view.source))


async def map(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> list[Any] | SparseArray:
    """Collect the settled callback result for every element.

    Holes stay holes: a SparseArray input gives a SparseArray of the same
    length, any other input gives a list with HOLE at the unassigned slots.

    As with for_each, a given this_arg becomes the callback's first argument
    and the element moves to the second, so pair it with an unbound method
    such as ``Scale.apply``, not with ``lambda n: ...``.

    Example:
        ```python
        async def example():
            assert await map([1, 2, 3], lambda n: n * 2) == [2, 4, 6]
        ```
    """
    view = view_of(value, 'map')
    fn = _callback_for(callback, this_arg)
    results = await strategy.apply(view, lambda i, el: fn(el, i, view.source))
    if isinstance(view.source, SparseArray):
        return SparseArray(view.length, dict(results))
    mapped: list[Any] = [HOLE] * view.length
    for i, result in results:
        mapped[i] = result
    return mapped


async def filter(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> list[Any]:
    """Return the settled elements whose callback result is truthy."""
    view = view_of(value, 'filter')
    fn = _callback_for(callback, this_arg)
    kept: dict[int, Any] = {}

    def keep_if(i: int, element: Any) -> Any:
        kept[i] = element
        return fn(element, i, view.source)

    results = await strategy.apply(view, keep_if)
    return [kept[i] for i, passed in results if passed]


async def some(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> bool:
    """Return True if the callback is truthy for any assigned element.

    No callback runs after the first truthy result. Series mode also leaves
    later elements unsettled.
    """
    view = view_of(value, 'some')
    fn = _callback_for(callback, this_arg)
    index = await strategy.first(view, lambda i, el: fn(el, i, view.source), range(view.length))
    return index != -1


async def every(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> bool:
    """Return True if the callback is truthy for every assigned element.

    No callback runs after the first falsy result. Series mode also leaves
    later elements unsettled.
    """
    view = view_of(value, 'every')
    fn = _callback_for(callback, this_arg)

    async def fails(i: int, element: Any) -> bool:
        return not await settle(fn(element, i, view.source))

    index = await strategy.first(view, fails, range(view.length))
    return index == -1


async def find(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> Any:
    """Return the first settled element the callback accepts, or None.

    Holes are visited and read as None, as with the native find.
    """
    view = view_of(value, 'find')
    fn = _callback_for(callback, this_arg)
    found: dict[int, Any] = {}

    def matches(i: int, element: Any) -> Any:
        found[i] = element
        return fn(element, i, view.source)

    index = await strategy.first(view, matches, range(view.length), holes=True)
    return None if index == -1 else found[index]


async def find_index(
    value: Any,
    callback: Callable[..., Any] | None = None,
    this_arg: Any = NO_RECEIVER,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> int:
    """Return the index of the first element the callback accepts, or -1."""
    view = view_of(value, 'find_index')
    fn = _callback_for(callback, this_arg)
    return await strategy.first(view, lambda i, el: fn(el, i, view.source), range(view.length), holes=True)


async def reduce(
    value: Any,
    callback: Callable[..., Any] | None = None,
    initial: Any = _MISSING,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> Any:
    """Fold the settled elements with callback(accumulator, element, index, collection).

    Without an initial value the first assigned element seeds the
    accumulator. A pending initial value and pending accumulators are
    awaited before each step.

    Raises:
        NotArrayLikeError: If value is not array-like.
        NotCallableError: If callback is missing or not callable.
        EmptyReductionError: If there are no assigned elements and no initial value.

    Example:
        ```python
        async def example():
            assert await reduce([1, 2, 4], lambda acc, n: acc + n) == 7
            assert await reduce([], lambda acc, n: acc + n, 0) == 0
        ```
    """
    view = view_of(value, 'reduce')
    fn = _callback_for(callback, NO_RECEIVER)
    has_accumulator = initial is not _MISSING
    accumulator = await settle(initial) if has_accumulator else None

    async with aclosing(strategy.walk(view, range(view.length))) as elements:
        async for i, element in elements:
            if not has_accumulator:
                accumulator, has_accumulator = element, True
                continue
            accumulator = await settle(fn(accumulator, element, i, view.source))

    if not has_accumulator:
        raise EmptyReduction('reduce').to_exception()
    return accumulator


async def includes(
    value: Any,
    search_item: Any,
    from_index: int = 0,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> bool:
    """Return True if search_item is among the elements (or is a substring of a str).

    Uses same-value-zero equality, so NaN matches NaN. A negative from_index
    counts back from the end. On a str, from_index is clamped to the string
    bounds instead.

    Example:
        ```python
        async def example():
            assert await includes([1, 2, 3], 3, -1) is True
            assert await includes([float('nan')], float('nan')) is True
            assert await includes('test string', 'string', -6) is True
        ```
    """
    view = view_of(value, 'includes')
    if isinstance(view.source, str):
        start = min(max(int(from_index), 0), view.length)
        return str(search_item) in view.source[start:]
    start = _start_index(from_index, view.length)
    index = await strategy.first(
        view, lambda i, el: same_value_zero(el, search_item), range(start, view.length), holes=True
    )
    return index != -1


async def index_of(
    value: Any,
    search_item: Any,
    from_index: int = 0,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> int:
    """Return the first index holding search_item, or -1.

    Holes are skipped and NaN never matches. On a str this is a substring
    search from the clamped position.
    """
    view = view_of(value, 'index_of')
    if isinstance(view.source, str):
        start = min(max(int(from_index), 0), view.length)
        return view.source.find(str(search_item), start)
    start = _start_index(from_index, view.length)
    return await strategy.first(view, lambda i, el: strict_equals(el, search_item), range(start, view.length))


async def last_index_of(
    value: Any,
    search_item: Any,
    from_index: int | None = None,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> int:
    """Return the last index at or before from_index holding search_item, or -1.

    from_index defaults to the final index; a negative value counts back from
    the end. Series mode settles elements from the back towards the front.
    """
    view = view_of(value, 'last_index_of')
    if isinstance(view.source, str):
        needle = str(search_item)
        position = view.length if from_index is None else min(max(int(from_index), 0), view.length)
        return view.source.rfind(needle, 0, position + len(needle))
    if from_index is None:
        start = view.length - 1
    else:
        start = int(from_index)
        start = min(start, view.length - 1) if start >= 0 else view.length + start
    return await strategy.first(view, lambda i, el: strict_equals(el, search_item), range(start, -1, -1))


async def join(
    value: Any,
    separator: str | None = ',',
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> str:
    """Join the settled elements into a str; holes and None render as ''."""
    view = view_of(value, 'join')
    parts = [''] * view.length
    async with aclosing(strategy.walk(view, range(view.length))) as elements:
        async for i, element in elements:
            parts[i] = '' if element is None else str(element)
    return (',' if separator is None else str(separator)).join(parts)


async def concat(
    value: Any,
    *values: Any,
    strategy: ResolutionStrategy = PARALLEL,
) -> list[Any] | str:
    """Return the settled elements followed by the settled values.

    Array-like values (other than str) are spread after their own elements
    are settled; anything else is appended as a single element. On a str
    receiver, the string forms of the values are concatenated instead.
    """
    view = view_of(value, 'concat')
    extra = await gather(values)
    if isinstance(view.source, str):
        return view.source + ''.join(str(v) for v in extra)

    async def settled_slots(other: ArrayView) -> list[Any]:
        slots = list(other.slots)
        async with aclosing(strategy.walk(other, range(other.length))) as elements:
            async for i, element in elements:
                slots[i] = element
        return slots

    combined = await settled_slots(view)
    for item in extra:
        if is_array_like(item) and not isinstance(item, str):
            combined.extend(await settled_slots(view_of(item, 'concat')))
        else:
            combined.append(item)
    return combined


async def split(
    value: Any,
    separator: str | None = None,
    limit: int | None = None,
    *,
    strategy: ResolutionStrategy = PARALLEL,
) -> list[str]:
    """Split a str on separator, keeping at most limit pieces (negative: no limit).

    With no separator the whole string is the only piece; an empty separator
    splits into characters. The strategy is accepted for uniformity and has
    nothing to settle.

    Raises:
        NotAStringError: If value is not a str.
    """
    error = check_str(value, 'split')
    if error is not None:
        raise error.to_exception()
    if separator is None:
        pieces = [value]
    elif separator == '':
        pieces = list(value)
    else:
        pieces = value.split(str(separator))
    if limit is not None and int(limit) >= 0:
        pieces = pieces[: int(limit)]
    return pieces
