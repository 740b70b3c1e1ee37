"""Resolution strategies for collections whose elements may be pending.

Two strategies sit behind one interface:

- Parallel (the default) settles every pending element concurrently in an
  anyio task group, then works over the settled values. Input order is kept
  regardless of completion order.
- Series settles one element at a time in the order it is asked to visit
  them, so short-circuiting operations never wait on elements past the one
  that decided the answer.

Example:
    ```python
    from async_af.resolve import Mode, strategy_for

    strategy = strategy_for(Mode.SERIES)
    ```
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Sequence
from enum import Enum
from typing import Any, Protocol

import aiologic
import anyio

from async_af._config import get_config
from async_af._internal.array_like import ArrayView
from async_af._logging import get_logger

__all__ = [
    'Mode',
    'Parallel',
    'ResolutionStrategy',
    'Series',
    'gather',
    'settle',
    'strategy_for',
]

logger = get_logger(__name__)


class Mode(Enum):
    """Concurrency discipline used to settle pending elements."""

    PARALLEL = 'parallel'
    SERIES = 'series'


async def settle(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _await_element(aw: Awaitable[Any]) -> Any:
    # Tasks and futures belong to the caller: cancelling the wait must not cancel them
    if asyncio.isfuture(aw):
        return await asyncio.shield(aw)
    return await aw


async def gather(values: Iterable[Any], *, limit: int | None = None) -> list[Any]:
    """Settle every awaitable in values concurrently, preserving order.

    Non-awaitable values pass through untouched. If any awaitable fails, the
    first failure to be observed is raised as-is (not wrapped in an exception
    group) and the resolutions still in flight are cancelled. Tasks and
    futures are only waited on, never cancelled, so work the caller started
    keeps running after a sibling fails.

    Args:
        values: Values and awaitables to settle.
        limit: Maximum number of awaitables being settled at once.
            None means unlimited.

    Returns:
        The settled values, in input order.

    Example:
        ```python
        async def double(n: int) -> int:
            return n * 2

        async def example():
            assert await gather([double(1), 5, double(3)]) == [2, 5, 6]
        ```
    """
    settled = list(values)
    pending = [(i, v) for i, v in enumerate(settled) if inspect.isawaitable(v)]
    if not pending:
        return settled

    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None
    failure: Exception | None = None

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, aw: Awaitable[Any]) -> None:
            nonlocal failure
            try:
                if limiter is None:
                    settled[i] = await _await_element(aw)
                else:
                    async with limiter:
                        settled[i] = await _await_element(aw)
            except Exception as exc:
                if failure is None:
                    failure = exc
                    logger.debug('element resolution failed', index=i, error=repr(exc))
                    tg.cancel_scope.cancel()

        for i, aw in pending:
            tg.start_soon(run_one, i, aw)

    if failure is not None:
        # Close coroutines that were cancelled before they ever started
        for i, aw in pending:
            if settled[i] is aw and inspect.iscoroutine(aw):
                aw.close()
        raise failure
    return settled


class ResolutionStrategy(Protocol):
    """How an adapter settles the elements it visits."""

    mode: Mode

    def walk(
        self, view: ArrayView, indices: Sequence[int], *, holes: bool = False
    ) -> AsyncIterator[tuple[int, Any]]:
        """Yield (index, settled element) for each index in indices.

        Holes are skipped, or yielded as None when holes is True.
        """
        ...

    async def apply(
        self, view: ArrayView, fn: Callable[[int, Any], Any]
    ) -> list[tuple[int, Any]]:
        """Call fn(index, element) for every assigned slot and settle the results."""
        ...

    async def first(
        self,
        view: ArrayView,
        predicate: Callable[[int, Any], Any],
        indices: Sequence[int],
        *,
        holes: bool = False,
    ) -> int:
        """Return the first index whose settled predicate result is truthy, or -1.

        Predicates run one at a time in visiting order; none runs after a match.
        """
        ...


class Parallel:
    """Settle everything at once, then work over the settled values.

    Attributes:
        mode: Always Mode.PARALLEL.
        limit: Maximum concurrent resolutions, None for unlimited.
    """

    __slots__ = ('limit',)

    mode = Mode.PARALLEL

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit

    async def _settle_view(self, view: ArrayView) -> list[Any]:
        # HOLE is not awaitable, so holes survive gather() in place
        return await gather(view.slots, limit=self.limit)

    async def walk(
        self, view: ArrayView, indices: Sequence[int], *, holes: bool = False
    ) -> AsyncIterator[tuple[int, Any]]:
        settled = await self._settle_view(view)
        for i in indices:
            if view.is_hole(i):
                if holes:
                    yield i, None
                continue
            yield i, settled[i]

    async def apply(
        self, view: ArrayView, fn: Callable[[int, Any], Any]
    ) -> list[tuple[int, Any]]:
        settled = await self._settle_view(view)
        indices = [i for i, _ in view.assigned()]
        # Invoke in index order before awaiting anything, like a native map
        calls: list[Any] = []
        try:
            for i in indices:
                calls.append(fn(i, settled[i]))
        except Exception:
            for call in calls:
                if inspect.iscoroutine(call):
                    call.close()
            raise
        results = await gather(calls, limit=self.limit)
        return list(zip(indices, results, strict=True))

    async def first(
        self,
        view: ArrayView,
        predicate: Callable[[int, Any], Any],
        indices: Sequence[int],
        *,
        holes: bool = False,
    ) -> int:
        settled = await self._settle_view(view)
        for i in indices:
            if view.is_hole(i):
                if not holes:
                    continue
                element = None
            else:
                element = settled[i]
            if await settle(predicate(i, element)):
                return i
        return -1

    def __repr__(self) -> str:
        return f'Parallel(limit={self.limit!r})'


class Series:
    """Settle one element at a time, in visiting order.

    Attributes:
        mode: Always Mode.SERIES.
    """

    __slots__ = ()

    mode = Mode.SERIES

    async def walk(
        self, view: ArrayView, indices: Sequence[int], *, holes: bool = False
    ) -> AsyncIterator[tuple[int, Any]]:
        for i in indices:
            if view.is_hole(i):
                if holes:
                    yield i, None
                continue
            yield i, await settle(view.slots[i])

    async def apply(
        self, view: ArrayView, fn: Callable[[int, Any], Any]
    ) -> list[tuple[int, Any]]:
        results = []
        for i, raw in view.assigned():
            element = await settle(raw)
            results.append((i, await settle(fn(i, element))))
        return results

    async def first(
        self,
        view: ArrayView,
        predicate: Callable[[int, Any], Any],
        indices: Sequence[int],
        *,
        holes: bool = False,
    ) -> int:
        for i in indices:
            if view.is_hole(i):
                if not holes:
                    continue
                element = None
            else:
                element = await settle(view.slots[i])
            if await settle(predicate(i, element)):
                logger.debug('series search stopped early', index=i, length=view.length)
                return i
        return -1

    def __repr__(self) -> str:
        return 'Series()'


SERIES = Series()


def strategy_for(mode: Mode | str) -> ResolutionStrategy:
    """Return the strategy for mode.

    The parallel strategy picks up its concurrency limit from the current
    configuration each time it is requested.

    Args:
        mode: Mode enum or its string value ("parallel", "series").

    Returns:
        A Parallel or Series strategy.
    """
    resolved = Mode(mode.lower()) if isinstance(mode, str) else mode
    if resolved is Mode.SERIES:
        return SERIES
    return Parallel(limit=get_config().limit)
