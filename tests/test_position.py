"""Tests for offset to line/column resolution and StringInput."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pegengine.engine.input import ParserInput, StringInput
from pegengine.engine.position import Position, resolve_position
from tests.strategies import multiline_text

# ============================================================================
# POSITION RESOLUTION
# ============================================================================


class TestResolvePosition:
    """Test resolve_position() on fixed inputs."""

    def test_second_line_second_column(self) -> None:
        """The 'd' in 'ab\\ncd' is at line 2, column 2."""
        assert resolve_position(4, StringInput("ab\ncd")) == Position(4, 2, 2)

    def test_start_of_input(self) -> None:
        assert resolve_position(0, StringInput("ab\ncd")) == Position(0, 1, 1)

    def test_newline_belongs_to_line_it_terminates(self) -> None:
        assert resolve_position(2, StringInput("ab\ncd")) == Position(2, 1, 3)

    def test_start_of_second_line(self) -> None:
        assert resolve_position(3, StringInput("ab\ncd")) == Position(3, 2, 1)

    def test_end_of_input_is_one_past_last_column(self) -> None:
        assert resolve_position(5, StringInput("ab\ncd")) == Position(5, 2, 3)

    def test_end_of_input_after_trailing_newline(self) -> None:
        assert resolve_position(3, StringInput("ab\n")) == Position(3, 2, 1)

    def test_empty_input(self) -> None:
        assert resolve_position(0, StringInput("")) == Position(0, 1, 1)

    def test_offset_beyond_input_is_clamped(self) -> None:
        assert resolve_position(99, StringInput("ab\ncd")) == Position(5, 2, 3)

    def test_consecutive_newlines(self) -> None:
        assert resolve_position(2, StringInput("\n\nx")) == Position(2, 3, 1)

    def test_crlf_counts_one_line(self) -> None:
        assert resolve_position(4, StringInput("ab\r\ncd")) == Position(4, 2, 1)

    def test_negative_offset_raises(self) -> None:
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            resolve_position(-1, StringInput("ab"))

    @given(text=multiline_text(), offset=st.integers(min_value=0, max_value=250))
    def test_matches_count_and_rfind(self, text: str, offset: int) -> None:
        """PROPERTY: backward scan agrees with str.count/str.rfind."""
        position = resolve_position(offset, StringInput(text))
        clamped = min(offset, len(text))

        assert position.offset == clamped
        assert position.line == text.count("\n", 0, clamped) + 1
        assert position.column == clamped - text.rfind("\n", 0, clamped)


# ============================================================================
# POSITION VALUE OBJECT
# ============================================================================


class TestPosition:
    """Test Position invariants."""

    @pytest.mark.parametrize(
        ("offset", "line", "column", "field"),
        [(-1, 1, 1, "offset"), (0, 0, 1, "line"), (0, 1, 0, "column")],
    )
    def test_invalid_fields_rejected(self, offset: int, line: int, column: int, field: str) -> None:
        with pytest.raises(ValueError, match=f"Position.{field}"):
            Position(offset, line, column)

    def test_is_end_of_input(self) -> None:
        source = StringInput("ab")

        assert not Position(1, 1, 2).is_end_of_input(source)
        assert Position(2, 1, 3).is_end_of_input(source)

    def test_frozen(self) -> None:
        position = Position(0, 1, 1)

        with pytest.raises(AttributeError):
            position.line = 2  # type: ignore[misc]


# ============================================================================
# STRING INPUT
# ============================================================================


class TestStringInput:
    """Test the in-memory ParserInput."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(StringInput("x"), ParserInput)

    def test_accessors(self) -> None:
        source = StringInput("hello\nworld")

        assert source.length() == 11
        assert source.char_at(6) == "w"
        assert source.slice_string(0, 5) == "hello"

    def test_get_line(self) -> None:
        source = StringInput("hello\r\nworld\n")

        assert source.get_line(1) == "hello"
        assert source.get_line(2) == "world"
        assert source.get_line(3) == ""

    @pytest.mark.parametrize("line_number", [0, 4])
    def test_get_line_out_of_range(self, line_number: int) -> None:
        with pytest.raises(ValueError, match="Line"):
            StringInput("a\nb\nc").get_line(line_number)
