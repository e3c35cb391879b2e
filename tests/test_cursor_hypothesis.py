"""Hypothesis property-based tests for Cursor marks and the high-water mark."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from pegengine.engine.cursor import Cursor
from pegengine.engine.input import StringInput
from pegengine.engine.parser import Parser
from pegengine.engine.tracker import MismatchTracker
from pegengine.engine.value_stack import ValueStack
from tests.strategies import cursor_operations, source_text, tracked_operations


class TestMarkRoundTrip:
    """Restoring a mark undoes everything done after it."""

    @given(
        text=source_text,
        prefix=st.integers(min_value=0, max_value=20),
        preloaded=st.integers(min_value=0, max_value=5),
        operations=cursor_operations,
    )
    def test_reset_restores_offset_and_depth(
        self, text: str, prefix: int, preloaded: int, operations: list[str]
    ) -> None:
        """INVARIANT: reset(mark) restores the offset and depth captured by mark()."""
        cursor = Cursor(StringInput(text), ValueStack(), MismatchTracker())
        for _ in range(prefix):
            cursor.advance()
        for value in range(preloaded):
            cursor.value_stack.push(value)

        mark = cursor.mark()
        captured = (cursor.offset, cursor.value_stack.depth(), list(cursor.value_stack))

        for operation in operations:
            match operation:
                case "advance":
                    cursor.advance()
                case "push":
                    cursor.value_stack.push(object())
                case "pop":
                    if cursor.value_stack.depth() > mark.depth:
                        cursor.value_stack.pop()
                case "back":
                    cursor.reset_cursor(max(mark.offset, cursor.offset - 1))

        cursor.reset(mark)

        assert (cursor.offset, cursor.value_stack.depth(), list(cursor.value_stack)) == captured


class TestDeepestOffset:
    """The plain run's deepest offset is the maximum offset reached."""

    @given(text=source_text, operations=tracked_operations)
    def test_deepest_offset_is_maximum_reached(self, text: str, operations: list[str]) -> None:
        """INVARIANT: deepest offset == max over advances and registered mismatches."""
        parser = Parser(text)
        reached = [0]

        def rule() -> bool:
            cursor = parser.cursor
            for operation in operations:
                match operation:
                    case "advance":
                        cursor.advance()
                    case "back":
                        cursor.reset_cursor(max(0, cursor.offset - 1))
                    case "mismatch":
                        cursor.register_char_mismatch()
                reached.append(cursor.offset)
            return True

        parser.run(rule)

        assert parser.deepest_offset == max(reached)
