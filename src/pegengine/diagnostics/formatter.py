"""ParseError formatting service.

Renders the ParseError data object in the context of its input. Needs no
state beyond the ParseError and the input source.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pegengine.engine.frames import ParseError
    from pegengine.engine.input import ParserInput

__all__ = [
    "OutputFormat",
    "ParseErrorFormatter",
]


class OutputFormat(StrEnum):
    """Output format options for ParseError formatting."""

    TEXT = "text"  # Multi-line with rule stacks and caret (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class ParseErrorFormatter:
    """ParseError formatting service.

    Attributes:
        output_format: Output style (text, simple, json)

    Example:
        >>> formatter = ParseErrorFormatter()
        >>> print(formatter.format(error, StringInput("abx")))
        Invalid input 'x', expected:
          word / 'c'
        (line 1, column 3):
        abx
          ^

        >>> formatter = ParseErrorFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(error, StringInput("abx")))
        1:3: Invalid input 'x' (expected: 'c')
    """

    output_format: OutputFormat = OutputFormat.TEXT

    def format(self, error: ParseError, source: ParserInput) -> str:
        """Format a ParseError against the input it was produced from.

        Args:
            error: ParseError returned by Parser.run()
            source: The parser's input

        Returns:
            Formatted error string
        """
        match self.output_format:
            case OutputFormat.TEXT:
                return self._format_text(error, source)
            case OutputFormat.SIMPLE:
                return self._format_simple(error, source)
            case OutputFormat.JSON:
                return self._format_json(error, source)

    def _format_text(self, error: ParseError, source: ParserInput) -> str:
        position = error.position
        parts = [self._problem(error, source)]
        if error.stacks:
            parts[0] += ", expected:"
            parts.extend(f"  {stack}" for stack in error.stacks)
        parts.append(f"(line {position.line}, column {position.column}):")
        parts.append(source.get_line(position.line))
        parts.append(" " * (position.column - 1) + "^")
        return "\n".join(parts)

    def _format_simple(self, error: ParseError, source: ParserInput) -> str:
        position = error.position
        message = f"{position.line}:{position.column}: {self._problem(error, source)}"
        if error.expected:
            message += f" (expected: {', '.join(error.expected)})"
        return message

    def _format_json(self, error: ParseError, source: ParserInput) -> str:
        position = error.position
        end_of_input = position.is_end_of_input(source)
        data = {
            "offset": position.offset,
            "line": position.line,
            "column": position.column,
            "end_of_input": end_of_input,
            "found": None if end_of_input else source.char_at(position.offset),
            "expected": list(error.expected),
            "stacks": [[str(frame) for frame in stack.frames] for stack in error.stacks],
        }
        return json.dumps(data, ensure_ascii=False)

    @staticmethod
    def _problem(error: ParseError, source: ParserInput) -> str:
        if error.position.is_end_of_input(source):
            return "Unexpected end of input"
        return f"Invalid input '{_escape(source.char_at(error.position.offset))}'"


def _escape(char: str) -> str:
    """Escape control characters (log injection prevention)."""
    if char.isprintable():
        return char
    return char.encode("unicode_escape").decode("ascii")
