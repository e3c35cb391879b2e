"""pegengine exception hierarchy with structured diagnostics.

Two families that must never be conflated:

- ParseFailedError: raised only by RunResult.unwrap() for callers that
  prefer exceptions; wraps the ParseError data object returned by run().
- EngineContractError: programming errors in rule construction. These are
  fatal and are never absorbed into a ParseError.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from pegengine.engine.frames import ParseError

__all__ = [
    "AbortSignalEscapedError",
    "EngineContractError",
    "ErrorStackLimitExceededError",
    "ParseFailedError",
    "PegEngineError",
    "ReentrantRunError",
    "RuleDepthExceededError",
    "ValueStackError",
    "ValueStackShapeError",
]


class PegEngineError(Exception):
    """Base exception for all pegengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PegEngineError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailedError(PegEngineError):
    """Input did not match the top-level rule.

    Only raised by RunResult.unwrap(). Parser.run() itself returns the
    ParseError as data.

    Attributes:
        error: The ParseError describing where and why parsing failed
    """

    def __init__(self, message: str | Diagnostic, error: ParseError) -> None:
        super().__init__(message)
        self.error = error


class EngineContractError(PegEngineError):
    """A rule or caller broke the engine contract.

    Examples:
    - Final value stack does not match the requested shape
    - Abort signal raised outside a diagnostic pass
    - Unbounded alternatives registered at a single offset
    """


class ValueStackError(EngineContractError):
    """Value stack underflow or restore to a depth that no longer exists."""


class ValueStackShapeError(ValueStackError):
    """Final value stack contents do not match the requested shape."""


class AbortSignalEscapedError(EngineContractError):
    """The rule-stack abort signal was raised outside a collection pass."""


class ErrorStackLimitExceededError(EngineContractError):
    """Too many alternative rule stacks at the failure offset.

    A well-formed rule explores finitely many alternatives at one offset.
    """


class RuleDepthExceededError(EngineContractError):
    """Named rules nested deeper than the configured limit."""


class ReentrantRunError(EngineContractError):
    """Parser.run() entered while a run is already in flight on that parser."""
