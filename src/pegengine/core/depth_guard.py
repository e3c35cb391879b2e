"""Depth limiting for nested rule invocation.

Recursive grammars recurse on the Python call stack. DepthGuard turns a
runaway recursion (left recursion, adversarial nesting) into a
RuleDepthExceededError before the interpreter raises RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from pegengine.constants import MAX_RULE_DEPTH
from pegengine.diagnostics import RuleDepthExceededError
from pegengine.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames consumed per level of named-rule nesting.
_FRAMES_PER_RULE: int = 4


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting rule nesting depth.

    Usage in a named rule:
        with parser.depth_guard:
            return body()

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__. Parser.run() resets
        it before every run, including diagnostic passes that were aborted
        mid-rule.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_RULE_DEPTH)
        current_depth: Current nesting depth
    """

    max_depth: int = MAX_RULE_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave current_depth
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise RuleDepthExceededError(ErrorTemplate.rule_depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def reset(self) -> None:
        """Reset depth to zero (useful for reuse across multiple operations)."""
        self.current_depth = 0


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Each nested named rule costs several interpreter frames (the named
    wrapper, its combinator body and the sub-rule call), so the safe depth
    is a fraction of the remaining recursion budget. Logs a warning if
    clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)  # OK, within limit
        100
        >>> depth_clamp(1000)  # Exceeds limit, clamped
        237
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_RULE)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested rule depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
