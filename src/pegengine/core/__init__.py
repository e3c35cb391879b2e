"""Core utilities shared by the engine and rule layers.

Exports:
    DepthGuard: Context manager for rule nesting depth limiting
    depth_clamp: Clamp a requested depth against the recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
