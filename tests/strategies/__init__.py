"""Hypothesis strategies for pegengine property-based testing.

Usage:
    from tests.strategies import source_text, cursor_operations
"""

from .engine import (
    calculator_text,
    cursor_operations,
    multiline_text,
    source_text,
    tracked_operations,
)

__all__ = [
    "calculator_text",
    "cursor_operations",
    "multiline_text",
    "source_text",
    "tracked_operations",
]
