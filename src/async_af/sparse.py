"""Sparse arrays: fixed-length sequences whose slots may be unassigned.

Python lists have no holes, so async_af models them explicitly. A slot is a
hole when it holds the HOLE marker, or, for a SparseArray, when nothing was
ever assigned to it. Iteration helpers skip holes the way their native array
counterparts do.

Example:
    ```python
    from async_af import HOLE, SparseArray

    arr = SparseArray.of(HOLE, HOLE, 1, HOLE, 2)
    assert len(arr) == 5
    assert list(arr.items()) == [(2, 1), (4, 2)]
    ```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

__all__ = ['HOLE', 'SparseArray']


class _Hole:
    """Marker type for an unassigned slot."""

    __slots__ = ()
    _instance: _Hole | None = None

    def __new__(cls) -> _Hole:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<hole>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return 'HOLE'


HOLE: _Hole = _Hole()
"""Singleton marking an unassigned slot."""


class SparseArray:
    """Fixed-length array mapping a subset of its indices to values.

    Reading a hole returns None; has() tells holes apart from slots that
    were assigned None.

    Attributes:
        _length: Number of slots.
        _items: Assigned slots keyed by index.
    """

    __slots__ = ('_items', '_length')

    def __init__(self, length: int = 0, items: Mapping[int, Any] | None = None) -> None:
        if length < 0:
            msg = f'SparseArray length must be non-negative, got {length}'
            raise ValueError(msg)
        self._length = length
        self._items: dict[int, Any] = {}
        for index, value in (items or {}).items():
            self[index] = value

    @classmethod
    def of(cls, *values: Any) -> SparseArray:
        """Build a SparseArray from positional values; HOLE leaves a slot empty."""
        return cls(len(values), {i: v for i, v in enumerate(values) if v is not HOLE})

    def _normalize(self, index: int) -> int:
        position = index + self._length if index < 0 else index
        if not 0 <= position < self._length:
            msg = 'SparseArray index out of range'
            raise IndexError(msg)
        return position

    def has(self, index: int) -> bool:
        """Return True if the slot at index has been assigned."""
        return 0 <= index < self._length and index in self._items

    def items(self) -> Iterator[tuple[int, Any]]:
        """Yield (index, value) for assigned slots in ascending index order."""
        for index in sorted(self._items):
            yield index, self._items[index]

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> Any:
        return self._items.get(self._normalize(index))

    def __setitem__(self, index: int, value: Any) -> None:
        position = self._normalize(index)
        if value is HOLE:
            self._items.pop(position, None)
        else:
            self._items[position] = value

    def __delitem__(self, index: int) -> None:
        self._items.pop(self._normalize(index), None)

    def __iter__(self) -> Iterator[Any]:
        for index in range(self._length):
            yield self._items.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseArray):
            return NotImplemented
        return self._length == other._length and self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        slots = ', '.join(repr(self._items[i]) if i in self._items else '<hole>' for i in range(self._length))
        return f'SparseArray([{slots}])'
