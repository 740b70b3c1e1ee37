"""Reusable pending values for observing settle order and short-circuits."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import anyio


class Pending:
    """Awaitable that settles to value (or raises error) after delay seconds.

    Unlike a coroutine it can be awaited any number of times, and never
    warns when it is not awaited at all, so the same element can appear in
    several tests and series short-circuits can be checked via ``awaited``.

    Attributes:
        awaited: How many times settling started.
        settled: Shared list each successful settle appends value to.
    """

    def __init__(
        self,
        value: Any = None,
        delay: float = 0.0,
        *,
        error: Exception | None = None,
        settled: list[Any] | None = None,
    ) -> None:
        self.value = value
        self.delay = delay
        self.error = error
        self.settled = settled
        self.awaited = 0

    async def _settle(self) -> Any:
        self.awaited += 1
        await anyio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.settled is not None:
            self.settled.append(self.value)
        return self.value

    def __await__(self) -> Generator[Any, Any, Any]:
        return self._settle().__await__()

    def __repr__(self) -> str:
        return f'Pending({self.value!r})'


def pending_all(*values: Any, settled: list[Any] | None = None) -> list[Pending]:
    """Wrap each value in an immediately settling Pending."""
    return [Pending(v, settled=settled) for v in values]
