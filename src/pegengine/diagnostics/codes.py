"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages for engine faults.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3999: Syntax errors (input did not match the grammar)
        6000-6999: Engine contract violations (faulty rule construction)
    """

    # Syntax errors (3000-3999)
    PARSE_FAILED = 3001
    INPUT_TOO_LARGE = 3002

    # Engine contract violations (6000-6999)
    VALUE_STACK_UNDERFLOW = 6001
    VALUE_STACK_SHAPE_MISMATCH = 6002
    INVALID_MARK = 6003
    ABORT_SIGNAL_ESCAPED = 6004
    ERROR_STACK_LIMIT_EXCEEDED = 6005
    RULE_DEPTH_EXCEEDED = 6006
    RUN_REENTERED = 6007


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[VALUE_STACK_SHAPE_MISMATCH]: Expected 1 value(s) ...
              = help: Check the push/capture/action rules of the grammar

        Returns:
            Formatted error message
        """
        parts = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.hint:
            parts.append(f"  = help: {self.hint}")
        return "\n".join(parts)
