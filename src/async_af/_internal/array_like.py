"""Array-like capability checks and the slot view adapters iterate over."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from async_af.errors import NotArrayLike, NotAString, NotCallable
from async_af.sparse import HOLE, SparseArray

__all__ = [
    'ArrayView',
    'check_array_like',
    'check_callable',
    'check_str',
    'is_array_like',
    'view_of',
]


def is_array_like(value: Any) -> bool:
    """Return True for sequences and other indexable, sized non-mappings."""
    if isinstance(value, (Sequence, SparseArray)):
        return True
    if isinstance(value, (Mapping, type)):
        return False
    return hasattr(value, '__len__') and hasattr(value, '__getitem__')


def check_array_like(value: Any, operation: str) -> NotArrayLike | None:
    """Return a NotArrayLike error for value, or None if it is array-like."""
    if is_array_like(value):
        return None
    return NotArrayLike(operation, str(value))


def check_callable(callback: Any) -> NotCallable | None:
    """Return a NotCallable error for callback, or None if it can be called."""
    if callable(callback):
        return None
    return NotCallable(str(callback))


def check_str(value: Any, operation: str) -> NotAString | None:
    """Return a NotAString error for value, or None if it is a str."""
    if isinstance(value, str):
        return None
    return NotAString(operation, str(value))


def _read_slots(value: Any) -> tuple[Any, ...]:
    if isinstance(value, SparseArray):
        return tuple(value[i] if value.has(i) else HOLE for i in range(len(value)))
    if isinstance(value, (str, list, tuple)):
        return tuple(value)
    slots = []
    for i in range(len(value)):
        try:
            slots.append(value[i])
        except (IndexError, KeyError):
            slots.append(HOLE)
    return tuple(slots)


@dataclass(slots=True, frozen=True)
class ArrayView:
    """Snapshot of an array-like value: its slots, with HOLE for holes.

    Elements are read once, without awaiting anything. The source is kept
    so callbacks receive the original collection as their third argument.

    Attributes:
        source: The collection the view was taken of.
        slots: One entry per index; HOLE marks an unassigned slot.
    """

    source: Any
    slots: tuple[Any, ...]

    @property
    def length(self) -> int:
        return len(self.slots)

    def is_hole(self, index: int) -> bool:
        return self.slots[index] is HOLE

    def assigned(self) -> Iterator[tuple[int, Any]]:
        """Yield (index, raw element) for assigned slots."""
        for index, raw in enumerate(self.slots):
            if raw is not HOLE:
                yield index, raw


def view_of(value: Any, operation: str) -> ArrayView:
    """Take an ArrayView of value, raising NotArrayLikeError if it is not array-like."""
    error = check_array_like(value, operation)
    if error is not None:
        raise error.to_exception()
    return ArrayView(value, _read_slots(value))
