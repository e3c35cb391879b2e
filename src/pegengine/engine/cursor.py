"""Mutable backtracking cursor.

The cursor offset is the number of characters consumed so far; it starts
at 0 and never exceeds the input length. A Mark bundles the offset with the
value-stack depth so that a rule can roll back both in one step.

Design:
    - Peek before consuming: leaf rules compare cursor.peek() and only
      advance on a match, so the offset of a failed comparison is always
      the current offset.
    - EOI is a value (constants.EOI), not an exception.
    - Line:column is never computed here (see position.resolve_position).
"""

from dataclasses import dataclass

from pegengine.constants import EOI
from pegengine.engine.input import ParserInput
from pegengine.engine.tracker import MismatchTracker
from pegengine.engine.value_stack import ValueStack

__all__ = ["Cursor", "Mark"]


@dataclass(frozen=True, slots=True)
class Mark:
    """Snapshot of cursor offset and value-stack depth.

    Restoring a mark is idempotent and may be repeated any number of times.

    Attributes:
        offset: Cursor offset at capture
        depth: Value-stack depth at capture
    """

    offset: int
    depth: int


class Cursor:
    """Input position, value stack and mismatch reporting for one parser.

    Mutability Note:
        Intentionally mutable. Owned by exactly one Parser; not safe for
        concurrent use.

    Example:
        >>> cursor = Cursor(StringInput("ab"), ValueStack(), MismatchTracker())
        >>> start = cursor.mark()
        >>> cursor.advance()
        'a'
        >>> cursor.value_stack.push("x")
        >>> cursor.reset(start)
        >>> (cursor.offset, cursor.value_stack.depth())
        (0, 0)
    """

    __slots__ = ("_input", "_length", "_tracker", "offset", "value_stack")

    def __init__(
        self, source: ParserInput, value_stack: ValueStack, tracker: MismatchTracker
    ) -> None:
        self._input = source
        self._length = source.length()
        self._tracker = tracker
        self.value_stack = value_stack
        self.offset = 0

    @property
    def input(self) -> ParserInput:
        return self._input

    @property
    def current_offset(self) -> int:
        return self.offset

    @property
    def is_eoi(self) -> bool:
        return self.offset >= self._length

    def restart(self) -> None:
        """Move to the start of input and clear the value stack."""
        self.offset = 0
        self.value_stack.clear()

    def peek(self) -> str:
        """Character at the current offset, or EOI at end of input."""
        if self.offset < self._length:
            return self._input.char_at(self.offset)
        return EOI

    def advance(self) -> str:
        """Consume and return one character, or return EOI without moving.

        Outside diagnostic passes, a successful advance raises the tracker's
        high-water mark.
        """
        offset = self.offset
        if offset >= self._length:
            return EOI
        char = self._input.char_at(offset)
        self.offset = offset + 1
        self._tracker.observe_advance(self.offset)
        return char

    def mark(self) -> Mark:
        return Mark(self.offset, self.value_stack.depth())

    def reset(self, mark: Mark) -> None:
        """Restore offset and value-stack depth from mark.

        Values pushed after the mark are discarded.

        Raises:
            ValueStackError: If values below the mark were popped since capture
        """
        self.offset = mark.offset
        self.value_stack.truncate(mark.depth)

    def mark_cursor(self) -> int:
        """Offset-only mark for rules that never touch the value stack."""
        return self.offset

    def reset_cursor(self, offset: int) -> None:
        self.offset = offset

    def slice_input(self, start: int) -> str:
        """Text consumed between start and the current offset."""
        return self._input.slice_string(start, self.offset)

    def register_char_mismatch(self) -> None:
        """Report a failed character comparison at the current offset.

        Raises:
            RuleStackCollector: When a diagnostic pass aborts here
        """
        self._tracker.register_mismatch(self.offset)
