"""Read-only, random-access input sources.

The engine never inspects input except through the ParserInput protocol,
so any fully materialized character source can be parsed.

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = ["ParserInput", "StringInput"]


@runtime_checkable
class ParserInput(Protocol):
    """Character source consumed by the engine."""

    def length(self) -> int:
        """Number of characters in the input."""
        ...

    def char_at(self, offset: int) -> str:
        """Character at offset, valid for 0 <= offset < length()."""
        ...

    def slice_string(self, start: int, end: int) -> str:
        """Characters in [start, end)."""
        ...

    def get_line(self, line_number: int) -> str:
        """Content of a 1-based line, without its line ending."""
        ...


@dataclass(frozen=True, slots=True)
class StringInput:
    """ParserInput over an in-memory string.

    Example:
        >>> source = StringInput("ab\\ncd")
        >>> source.length()
        5
        >>> source.char_at(3)
        'c'
        >>> source.get_line(2)
        'cd'
    """

    text: str

    def length(self) -> int:
        return len(self.text)

    def char_at(self, offset: int) -> str:
        return self.text[offset]

    def slice_string(self, start: int, end: int) -> str:
        return self.text[start:end]

    def get_line(self, line_number: int) -> str:
        """Extract the content of a specific line.

        Args:
            line_number: 1-based line number

        Returns:
            Content of the line (without trailing newline or carriage return)

        Raises:
            ValueError: If line_number is outside the input
        """
        if line_number < 1:
            msg = f"Line number must be >= 1, got {line_number}"
            raise ValueError(msg)

        lines = self.text.split("\n")
        if line_number > len(lines):
            msg = f"Line {line_number} out of range (input has {len(lines)} lines)"
            raise ValueError(msg)

        return lines[line_number - 1].removesuffix("\r")
