"""Offset to line/column resolution for error reporting.

Runs once per failed parse, on the cold path only. A single backward scan
from the offset towards the start of input; O(offset).
"""

from dataclasses import dataclass

from pegengine.engine.input import ParserInput

__all__ = ["Position", "resolve_position"]


@dataclass(frozen=True, slots=True)
class Position:
    """Location of an offset in the input.

    Attributes:
        offset: Character offset (0-indexed)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    offset: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate Position invariants.

        Raises:
            ValueError: If offset is negative, or line/column is less than 1.
        """
        if self.offset < 0:
            msg = f"Position.offset must be >= 0, got {self.offset}"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"Position.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"Position.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    def is_end_of_input(self, source: ParserInput) -> bool:
        """True if this position lies at or beyond the end of source."""
        return self.offset >= source.length()


def resolve_position(offset: int, source: ParserInput) -> Position:
    """Resolve an offset to a Position by backward scan.

    Newlines strictly before the offset are counted, so a newline character
    belongs to the line it terminates. Offsets past the end of input are
    clamped to the input length (end of input). At end of input the column
    is one past the last character of the final line; if the input ends with
    a newline that is column 1 of the following line.

    Args:
        offset: Character offset (0-indexed)
        source: Input the offset refers to

    Returns:
        Position with 1-based line and column

    Raises:
        ValueError: If offset is negative

    Example:
        >>> resolve_position(4, StringInput("ab\\ncd"))
        Position(offset=4, line=2, column=2)
        >>> resolve_position(0, StringInput("ab\\ncd"))
        Position(offset=0, line=1, column=1)
    """
    if offset < 0:
        msg = f"Offset must be >= 0, got {offset}"
        raise ValueError(msg)
    offset = min(offset, source.length())

    line = 1
    column = -1
    ix = offset - 1
    while ix >= 0:
        if source.char_at(ix) == "\n":
            if column == -1:
                column = offset - ix
            line += 1
        ix -= 1

    if column == -1:
        column = offset + 1

    return Position(offset=offset, line=line, column=column)
