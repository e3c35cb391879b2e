"""Checkpointable stack of semantic values.

Rules push values as they match and actions pop them to build results.
Backtracking truncates the stack back to the depth captured in a Mark.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from pegengine.diagnostics import ErrorTemplate, ValueStackError, ValueStackShapeError

__all__ = ["ValueShape", "ValueStack"]


class ValueShape(StrEnum):
    """Declared output shape of a successful run.

    EMPTY: No values; the result value is None
    SINGLE: Exactly one value; the result is that value
    ALL: Any number of values; the result is a tuple (bottom first)
    """

    EMPTY = "empty"
    SINGLE = "single"
    ALL = "all"


class ValueStack:
    """Mutable value stack owned by one Parser.

    Mutability Note:
        Intentionally mutable. One stack belongs to exactly one in-flight
        run and is cleared at the start of every run.

    Example:
        >>> stack = ValueStack()
        >>> stack.push(1)
        >>> stack.push(2)
        >>> depth = stack.depth()
        >>> stack.push(3)
        >>> stack.truncate(depth)
        >>> stack.finalize_as(ValueShape.ALL)
        (1, 2)
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: list[Any] = []

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        """Iterate values bottom to top."""
        return iter(self._values)

    def clear(self) -> None:
        self._values.clear()

    def depth(self) -> int:
        return len(self._values)

    def push(self, value: Any) -> None:
        self._values.append(value)

    def pop(self) -> Any:
        """Remove and return the top value.

        Raises:
            ValueStackError: If the stack is empty
        """
        if not self._values:
            raise ValueStackError(ErrorTemplate.value_stack_underflow("pop"))
        return self._values.pop()

    def pop_many(self, count: int) -> tuple[Any, ...]:
        """Remove the top count values, returned bottom first.

        Raises:
            ValueStackError: If fewer than count values are held
        """
        if count > len(self._values):
            raise ValueStackError(ErrorTemplate.value_stack_underflow(f"pop {count} values"))
        if count == 0:
            return ()
        popped = tuple(self._values[-count:])
        del self._values[-count:]
        return popped

    def peek(self) -> Any:
        """Return the top value without removing it.

        Raises:
            ValueStackError: If the stack is empty
        """
        if not self._values:
            raise ValueStackError(ErrorTemplate.value_stack_underflow("peek"))
        return self._values[-1]

    def truncate(self, depth: int) -> None:
        """Discard values above depth.

        Raises:
            ValueStackError: If depth exceeds the current depth; values
                below a checkpoint cannot be restored once popped.
        """
        if depth > len(self._values) or depth < 0:
            raise ValueStackError(ErrorTemplate.invalid_mark(depth, len(self._values)))
        del self._values[depth:]

    def finalize_as(self, shape: ValueShape | int) -> Any:
        """Interpret the stack contents as the declared output shape.

        Args:
            shape: A ValueShape, or an int n meaning "exactly n values"
                returned as a tuple

        Returns:
            None for EMPTY, the single value for SINGLE, otherwise a tuple

        Raises:
            ValueStackShapeError: If the stack does not have the declared arity
        """
        count = len(self._values)
        match shape:
            case ValueShape.ALL:
                return tuple(self._values)
            case ValueShape.EMPTY:
                if count != 0:
                    raise ValueStackShapeError(
                        ErrorTemplate.value_stack_shape_mismatch("no values", count)
                    )
                return None
            case ValueShape.SINGLE:
                if count != 1:
                    raise ValueStackShapeError(
                        ErrorTemplate.value_stack_shape_mismatch("exactly 1 value", count)
                    )
                return self._values[0]
            case int():
                if count != shape:
                    raise ValueStackShapeError(
                        ErrorTemplate.value_stack_shape_mismatch(f"exactly {shape} values", count)
                    )
                return tuple(self._values)
        msg = f"Unknown value shape: {shape!r}"
        raise TypeError(msg)
