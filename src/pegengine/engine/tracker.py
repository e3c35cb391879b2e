"""Mismatch tracking across plain and diagnostic runs.

The plain run records the high-water mark of progress (deepest offset).
Each diagnostic pass then counts mismatches at that frozen offset and
aborts on the first one it has not yet explained, carrying the frames of
the rules active at that moment.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pegengine.engine.frames import RuleFrame

__all__ = ["MismatchTracker", "RuleStackCollector"]


class RuleStackCollector(BaseException):  # noqa: N818 - control-flow signal, not an error
    """Abort signal for a diagnostic pass.

    Raised by MismatchTracker.register_mismatch() and re-raised by every
    rule it unwinds through; each rule appends its own frame on the way out,
    so frames are collected innermost first.

    A BaseException subclass, like GeneratorExit: an `except Exception` in
    rule or action code does not absorb it.

    Never escapes Parser.run().
    """

    def __init__(self) -> None:
        super().__init__("rule stack collection")
        self.frames: list[RuleFrame] = []

    def save(self, frame: RuleFrame) -> None:
        self.frames.append(frame)


class MismatchTracker:
    """Per-run mismatch and progress bookkeeping.

    Mutability Note:
        Intentionally mutable; owned by one Parser and reset by begin_run()
        at the start of every run.

    Attributes:
        deepest_offset: Furthest offset reached by the plain run
        collecting_index: Index of the stack the current pass targets,
            None in the plain run
        mismatches_seen: Mismatches at deepest_offset in the current pass
    """

    __slots__ = ("collecting_index", "deepest_offset", "mismatches_seen")

    def __init__(self) -> None:
        self.deepest_offset = 0
        self.collecting_index: int | None = None
        self.mismatches_seen = 0

    @property
    def collecting(self) -> bool:
        return self.collecting_index is not None

    def reset(self) -> None:
        """Forget the high-water mark; called before a plain run."""
        self.deepest_offset = 0

    def begin_run(self, collecting_index: int | None = None) -> None:
        self.mismatches_seen = 0
        self.collecting_index = collecting_index

    def observe_advance(self, offset: int) -> None:
        """Raise the high-water mark after a successful advance.

        The mark is frozen during diagnostic passes.
        """
        if self.collecting_index is None and offset > self.deepest_offset:
            self.deepest_offset = offset

    def register_mismatch(self, offset: int) -> None:
        """Record a failed character comparison at offset.

        Raises:
            RuleStackCollector: In a diagnostic pass, on the first mismatch
                at deepest_offset beyond those already explained by earlier
                passes.
        """
        if self.collecting_index is None:
            if offset > self.deepest_offset:
                self.deepest_offset = offset
            return
        if offset != self.deepest_offset:
            return
        self.mismatches_seen += 1
        if self.mismatches_seen > self.collecting_index:
            raise RuleStackCollector
