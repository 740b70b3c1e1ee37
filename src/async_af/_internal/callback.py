"""Callback binding: explicit receivers and positional-arity trimming.

Adapters always offer a callback every argument its native counterpart would
(element, index, collection). Python functions reject surplus positional
arguments, so the bound callback only forwards as many as the callback's
signature accepts. An explicit receiver (this_arg) is passed as the first
positional argument, which lets unbound methods be used as callbacks.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import wrapt

__all__ = ['NO_RECEIVER', 'bind_callback', 'positional_capacity']

NO_RECEIVER: Any = object()
"""Default this_arg: the callback is called without an explicit receiver."""

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def positional_capacity(func: Callable[..., Any]) -> int | None:
    """Return how many positional arguments func accepts.

    Returns None when func takes *args or exposes no signature, in which
    case every argument is forwarded.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in _POSITIONAL:
            count += 1
    return count


def bind_callback(callback: Callable[..., Any], this_arg: Any = NO_RECEIVER) -> Callable[..., Any]:
    """Wrap callback so it can be called with the full native argument list.

    Args:
        callback: The user callback.
        this_arg: Explicit receiver, passed as the first argument. Any value
            counts, None included; leave it unset to pass none.

    Returns:
        A wrapper that prepends this_arg (when given) and drops trailing
        arguments the callback cannot take.

    Example:
        ```python
        class Tally:
            def __init__(self) -> None:
                self.total = 0

            def add(self, n: int) -> None:
                self.total += n

        tally = Tally()
        bind_callback(Tally.add, tally)(5, 0, [5])
        assert tally.total == 5
        ```
    """
    capacity = positional_capacity(callback)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        if this_arg is not NO_RECEIVER:
            args = (this_arg, *args)
        if capacity is not None:
            args = args[:capacity]
        return wrapped(*args, **kwargs)

    return wrapper(callback)
