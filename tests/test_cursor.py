"""Tests for the backtracking cursor and Mark."""

from __future__ import annotations

import pytest

from pegengine.constants import EOI
from pegengine.diagnostics import ValueStackError
from pegengine.engine.cursor import Cursor, Mark
from pegengine.engine.input import StringInput
from pegengine.engine.tracker import MismatchTracker, RuleStackCollector
from pegengine.engine.value_stack import ValueStack


def _cursor(text: str) -> tuple[Cursor, MismatchTracker]:
    tracker = MismatchTracker()
    return Cursor(StringInput(text), ValueStack(), tracker), tracker


# ============================================================================
# ADVANCE / PEEK
# ============================================================================


class TestCursorAdvance:
    """Test character consumption."""

    def test_starts_at_zero(self) -> None:
        cursor, _ = _cursor("ab")

        assert cursor.offset == 0
        assert cursor.current_offset == 0
        assert not cursor.is_eoi

    def test_advance_returns_consumed_character(self) -> None:
        cursor, _ = _cursor("ab")

        assert cursor.advance() == "a"
        assert cursor.advance() == "b"
        assert cursor.offset == 2
        assert cursor.is_eoi

    def test_advance_at_end_returns_eoi_without_moving(self) -> None:
        cursor, _ = _cursor("a")
        cursor.advance()

        assert cursor.advance() == EOI
        assert cursor.offset == 1

    def test_empty_input_is_eoi(self) -> None:
        cursor, _ = _cursor("")

        assert cursor.is_eoi
        assert cursor.peek() == EOI
        assert cursor.advance() == EOI

    def test_peek_does_not_consume(self) -> None:
        cursor, _ = _cursor("ab")

        assert cursor.peek() == "a"
        assert cursor.offset == 0

    def test_slice_input(self) -> None:
        cursor, _ = _cursor("hello")
        start = cursor.mark_cursor()
        for _ in range(3):
            cursor.advance()

        assert cursor.slice_input(start) == "hel"

    def test_restart_clears_offset_and_values(self) -> None:
        cursor, _ = _cursor("ab")
        cursor.advance()
        cursor.value_stack.push(1)
        cursor.restart()

        assert cursor.offset == 0
        assert cursor.value_stack.depth() == 0


# ============================================================================
# HIGH-WATER MARK
# ============================================================================


class TestCursorHighWaterMark:
    """Successful advances raise the tracker's deepest offset."""

    def test_advance_raises_deepest_offset(self) -> None:
        cursor, tracker = _cursor("abc")
        cursor.advance()
        cursor.advance()

        assert tracker.deepest_offset == 2

    def test_backtracking_does_not_lower_deepest_offset(self) -> None:
        cursor, tracker = _cursor("abc")
        mark = cursor.mark()
        cursor.advance()
        cursor.advance()
        cursor.reset(mark)

        assert cursor.offset == 0
        assert tracker.deepest_offset == 2

    def test_advance_at_end_does_not_move_deepest_offset(self) -> None:
        cursor, tracker = _cursor("a")
        cursor.advance()
        cursor.advance()

        assert tracker.deepest_offset == 1

    def test_deepest_offset_frozen_while_collecting(self) -> None:
        cursor, tracker = _cursor("abc")
        tracker.begin_run(collecting_index=0)
        cursor.advance()

        assert tracker.deepest_offset == 0

    def test_register_char_mismatch_uses_current_offset(self) -> None:
        cursor, tracker = _cursor("abc")
        cursor.advance()
        tracker.begin_run(collecting_index=0)

        with pytest.raises(RuleStackCollector):
            cursor.register_char_mismatch()


# ============================================================================
# MARK / RESET
# ============================================================================


class TestCursorMark:
    """Mark bundles offset and value-stack depth."""

    def test_mark_captures_offset_and_depth(self) -> None:
        cursor, _ = _cursor("ab")
        cursor.advance()
        cursor.value_stack.push("x")

        assert cursor.mark() == Mark(offset=1, depth=1)

    def test_reset_discards_characters_and_values(self) -> None:
        cursor, _ = _cursor("abc")
        cursor.value_stack.push("keep")
        mark = cursor.mark()
        cursor.advance()
        cursor.value_stack.push("drop")
        cursor.advance()
        cursor.reset(mark)

        assert cursor.offset == 0
        assert list(cursor.value_stack) == ["keep"]

    def test_reset_is_idempotent(self) -> None:
        cursor, _ = _cursor("abc")
        mark = cursor.mark()
        for _ in range(2):
            cursor.advance()
            cursor.value_stack.push(1)
            cursor.reset(mark)

            assert cursor.mark() == mark

    def test_reset_below_popped_values_raises(self) -> None:
        cursor, _ = _cursor("a")
        cursor.value_stack.push(1)
        mark = cursor.mark()
        cursor.value_stack.pop()

        with pytest.raises(ValueStackError):
            cursor.reset(mark)

    def test_offset_only_mark(self) -> None:
        cursor, _ = _cursor("abc")
        start = cursor.mark_cursor()
        cursor.advance()
        cursor.value_stack.push(1)
        cursor.reset_cursor(start)

        assert cursor.offset == 0
        assert cursor.value_stack.depth() == 1

    def test_mark_is_frozen_value(self) -> None:
        mark = Mark(offset=1, depth=2)

        assert mark == Mark(1, 2)
        with pytest.raises(AttributeError):
            mark.offset = 3  # type: ignore[misc]
