"""Adapter error types: dual struct+exception for checks and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'EmptyReduction',
    'EmptyReductionError',
    'NotAString',
    'NotAStringError',
    'NotArrayLike',
    'NotArrayLikeError',
    'NotCallable',
    'NotCallableError',
]


# --- Receiver Errors ---


class NotArrayLike(msgspec.Struct, frozen=True, gc=False):
    """Receiver is not array-like - struct variant returned by shape checks."""

    operation: str
    value: str

    def to_exception(self) -> NotArrayLikeError:
        """Convert to exception for raise-based code."""
        return NotArrayLikeError(self.operation, self.value)


class NotArrayLikeError(TypeError):
    """Receiver is not array-like - exception variant."""

    def __init__(self, operation: str, value: str) -> None:
        self.operation = operation
        self.value = value
        super().__init__(f'{operation} cannot be called on {value}, only on a sequence or array-like object')

    def to_struct(self) -> NotArrayLike:
        """Convert to struct for check-based code."""
        return NotArrayLike(self.operation, self.value)


class NotAString(msgspec.Struct, frozen=True, gc=False):
    """Receiver is not a str - struct variant for string-only operations."""

    operation: str
    value: str

    def to_exception(self) -> NotAStringError:
        """Convert to exception for raise-based code."""
        return NotAStringError(self.operation, self.value)


class NotAStringError(TypeError):
    """Receiver is not a str - exception variant."""

    def __init__(self, operation: str, value: str) -> None:
        self.operation = operation
        self.value = value
        super().__init__(f'{operation} may be called on a str but was called on {value}')

    def to_struct(self) -> NotAString:
        """Convert to struct for check-based code."""
        return NotAString(self.operation, self.value)


# --- Callback Errors ---


class NotCallable(msgspec.Struct, frozen=True, gc=False):
    """Callback is missing or not callable - struct variant."""

    value: str = 'None'

    def to_exception(self) -> NotCallableError:
        """Convert to exception for raise-based code."""
        return NotCallableError(self.value)


class NotCallableError(TypeError):
    """Callback is missing or not callable - exception variant."""

    def __init__(self, value: str = 'None') -> None:
        self.value = value
        super().__init__(f'{value} is not a function')

    def to_struct(self) -> NotCallable:
        """Convert to struct for check-based code."""
        return NotCallable(self.value)


# --- Reduction Errors ---


class EmptyReduction(msgspec.Struct, frozen=True, gc=False):
    """Reduction over no elements without an initial value - struct variant."""

    operation: str = 'reduce'

    def to_exception(self) -> EmptyReductionError:
        """Convert to exception for raise-based code."""
        return EmptyReductionError(self.operation)


class EmptyReductionError(TypeError):
    """Reduction over no elements without an initial value - exception variant."""

    def __init__(self, operation: str = 'reduce') -> None:
        self.operation = operation
        super().__init__(f'{operation} of empty array with no initial value')

    def to_struct(self) -> EmptyReduction:
        """Convert to struct for check-based code."""
        return EmptyReduction(self.operation)
