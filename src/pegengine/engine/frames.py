"""Diagnostic data: rule frames, rule stacks, parse errors and run results.

ParseError is the only object that outlives a run. It is plain data,
returned (not raised) by Parser.run().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pegengine.diagnostics import ErrorTemplate, ParseFailedError
from pegengine.engine.position import Position

__all__ = ["ParseError", "RuleFrame", "RuleKind", "RuleStack", "RunResult"]


class RuleKind(StrEnum):
    """Kind of rule that contributed a frame to a rule stack."""

    NAMED = "named"
    SEQUENCE = "sequence"
    FIRST_OF = "first-of"
    OPTIONAL = "optional"
    ZERO_OR_MORE = "zero-or-more"
    ONE_OR_MORE = "one-or-more"
    CHAR_MATCH = "char"
    STRING_MATCH = "string"
    ANY_OF = "any-of"
    CHAR_RANGE = "char-range"
    ANY_CHAR = "any-char"
    END_OF_INPUT = "end-of-input"
    AND_PREDICATE = "and-predicate"
    NOT_PREDICATE = "not-predicate"
    CAPTURE = "capture"
    ACTION = "action"


_LITERAL_KINDS = frozenset({RuleKind.CHAR_MATCH, RuleKind.STRING_MATCH})


@dataclass(frozen=True, slots=True)
class RuleFrame:
    """One active rule at the moment a diagnostic pass aborted.

    Attributes:
        kind: Rule kind
        name: Rule name for NAMED frames, None otherwise
        detail: Kind-specific context (the literal, the character set, ...)

    Example:
        >>> str(RuleFrame(RuleKind.CHAR_MATCH, detail="a"))
        "'a'"
        >>> str(RuleFrame(RuleKind.NAMED, name="digits"))
        'digits'
    """

    kind: RuleKind
    name: str | None = None
    detail: str = ""

    def __str__(self) -> str:
        if self.name is not None:
            return self.name
        if self.kind in _LITERAL_KINDS:
            return repr(self.detail)
        if self.kind is RuleKind.ANY_OF:
            return f"any of {self.detail!r}"
        if self.kind is RuleKind.CHAR_RANGE:
            return f"[{self.detail}]"
        if self.detail:
            return f"{self.kind}({self.detail})"
        return str(self.kind)


@dataclass(frozen=True, slots=True)
class RuleStack:
    """One chain of active rules explaining a failure, root first."""

    frames: tuple[RuleFrame, ...]

    def __str__(self) -> str:
        return " / ".join(str(frame) for frame in self.frames)

    @property
    def innermost(self) -> RuleFrame | None:
        return self.frames[-1] if self.frames else None


@dataclass(frozen=True, slots=True)
class ParseError:
    """Where parsing failed and which alternatives were plausible there.

    Invariant:
        Every stack describes the same offset, position.offset. Stacks are
        in the order the grammar tried the alternatives.

    Attributes:
        position: Furthest offset reached by the failing run
        stacks: Alternative rule stacks at that offset
    """

    position: Position
    stacks: tuple[RuleStack, ...] = field(default_factory=tuple)

    @property
    def expected(self) -> tuple[str, ...]:
        """Innermost frame labels of all stacks, deduplicated, in order."""
        labels: dict[str, None] = {}
        for stack in self.stacks:
            frame = stack.innermost
            if frame is not None:
                labels[str(frame)] = None
        return tuple(labels)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of Parser.run(): a value or a ParseError, never both.

    Attributes:
        value: Finalized value stack contents (success only)
        error: Failure diagnostic (failure only)
    """

    value: Any = None
    error: ParseError | None = None

    @classmethod
    def success(cls, value: Any) -> RunResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ParseError) -> RunResult:
        return cls(error=error)

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            msg = "RunResult holds either a value or an error, not both"
            raise ValueError(msg)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise ParseFailedError on failure.

        Raises:
            ParseFailedError: If the run failed
        """
        if self.error is None:
            return self.value
        position = self.error.position
        raise ParseFailedError(
            ErrorTemplate.parse_failed(position.line, position.column), self.error
        )
