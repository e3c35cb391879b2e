"""Shared constants for pegengine.

This module provides centralized configuration constants used across
the engine and rule packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: Size constraints on parser input
- Depth limits: Recursion protection for nested rule invocation
- Diagnostic limits: Bounds on error-stack reconstruction

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_INPUT_SIZE",
    # Depth limits
    "MAX_RULE_DEPTH",
    # Diagnostic limits
    "MAX_ERROR_STACKS",
    # Sentinels
    "EOI",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum input size in characters (10 MiB).
# Bounds memory for a single in-flight parse.
MAX_INPUT_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of named rules within one run.
# Recursive grammars recurse on the Python stack, so the effective value is
# clamped against sys.getrecursionlimit() by depth_clamp().
MAX_RULE_DEPTH: int = 200

# ============================================================================
# DIAGNOSTIC LIMITS
# ============================================================================

# Maximum number of alternative rule stacks collected for one ParseError.
# Each stack costs one full re-parse; a rule that keeps registering
# mismatches at the same offset forever violates the rule contract.
MAX_ERROR_STACKS: int = 1024

# ============================================================================
# SENTINELS
# ============================================================================

# End-of-input marker returned by Cursor.advance().
# U+FFFF is a Unicode noncharacter and never a meaningful input character.
EOI: str = "\uffff"
