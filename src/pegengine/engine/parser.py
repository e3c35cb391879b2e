"""Match-and-diagnose execution engine.

This module provides the Parser class that runs a rule against one input
and, when the rule fails, reconstructs which rules were active at the
furthest offset the run reached.

Architecture:
    The success path does no diagnostic bookkeeping beyond a high-water
    mark. Only when the plain run fails does the error-stack builder re-run
    the rule, once per alternative, each pass configured to let the mismatches
    explained by earlier passes through and to abort on the next one:

        pass 0 (plain)      -> deepest offset D
        pass k (collecting) -> abort at the (k+1)-th mismatch at D, yielding
                               the rule frames active there
        first pass that completes without aborting ends the search

Rule Contract:
    A rule is a zero-argument callable returning a truthy value on match.
    Its only side effects are moving the cursor, pushing/popping the value
    stack and registering character mismatches. A well-formed rule tries
    finitely many alternatives at any one offset; max_error_stacks bounds
    the builder if it does not. Rules must not catch BaseException: the
    abort signal of a diagnostic pass has to unwind through them.

Concurrency:
    One in-flight run per Parser. Diagnostic passes run strictly
    sequentially and each fully resets engine state. Use one Parser per
    concurrent parse; construction is cheap.

See Also:
    - :mod:`pegengine.rules` - Rule combinators bound to a Parser
    - :mod:`pegengine.diagnostics.formatter` - ParseError rendering
"""

import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from pegengine.constants import MAX_ERROR_STACKS, MAX_INPUT_SIZE, MAX_RULE_DEPTH
from pegengine.core.depth_guard import DepthGuard
from pegengine.diagnostics import (
    AbortSignalEscapedError,
    ErrorStackLimitExceededError,
    ErrorTemplate,
    ParseErrorFormatter,
    ReentrantRunError,
)
from pegengine.engine.cursor import Cursor
from pegengine.engine.frames import ParseError, RuleStack, RunResult
from pegengine.engine.input import ParserInput, StringInput
from pegengine.engine.position import resolve_position
from pegengine.engine.tracker import MismatchTracker, RuleStackCollector
from pegengine.engine.value_stack import ValueShape, ValueStack

__all__ = ["Parser", "Rule"]

logger = logging.getLogger(__name__)

Rule: TypeAlias = Callable[[], Any]


class Parser:
    """Backtracking PEG execution engine for one input.

    Security:
    - Configurable max_input_size bounds memory for a single parse
    - Configurable max_rule_depth turns runaway recursion into an error
    - Configurable max_error_stacks bounds diagnostic re-parses

    Attributes:
        input: The input source
        cursor: Backtracking cursor shared by all rules of this parser
        value_stack: Semantic values produced by rules
        depth_guard: Named-rule nesting guard
        max_error_stacks: Maximum alternative stacks per ParseError

    Example:
        >>> parser = Parser("ab")
        >>> r = RuleBuilder(parser)
        >>> result = parser.run(r.seq(r.capture(r.string("ab")), r.eoi()))
        >>> result.value
        ('ab',)
    """

    __slots__ = (
        "_running",
        "_tracker",
        "cursor",
        "depth_guard",
        "input",
        "max_error_stacks",
        "value_stack",
    )

    def __init__(
        self,
        source: ParserInput | str,
        *,
        max_input_size: int | None = None,
        max_rule_depth: int | None = None,
        max_error_stacks: int | None = None,
    ) -> None:
        """Initialize parser with optional limits.

        Args:
            source: Input text, or any ParserInput
            max_input_size: Maximum input length in characters (default: 10 MiB).
                            Set to 0 to disable the limit.
            max_rule_depth: Maximum named-rule nesting (default: 200)
            max_error_stacks: Maximum alternative stacks per ParseError
                              (default: 1024)

        Raises:
            ValueError: If the input exceeds max_input_size
        """
        if isinstance(source, str):
            source = StringInput(source)
        size_limit = max_input_size if max_input_size is not None else MAX_INPUT_SIZE
        if size_limit > 0 and source.length() > size_limit:
            raise ValueError(ErrorTemplate.input_too_large(source.length(), size_limit).message)

        self.input = source
        self.value_stack = ValueStack()
        self._tracker = MismatchTracker()
        self.cursor = Cursor(source, self.value_stack, self._tracker)
        self.depth_guard = DepthGuard(
            max_depth=max_rule_depth if max_rule_depth is not None else MAX_RULE_DEPTH
        )
        self.max_error_stacks = (
            max_error_stacks if max_error_stacks is not None else MAX_ERROR_STACKS
        )
        self._running = False

    @property
    def deepest_offset(self) -> int:
        """High-water mark of the most recent plain run."""
        return self._tracker.deepest_offset

    @property
    def collecting(self) -> bool:
        """True while a diagnostic pass is executing."""
        return self._tracker.collecting

    def run(self, rule: Rule, *, shape: ValueShape | int = ValueShape.ALL) -> RunResult:
        """Run rule against the whole input.

        Args:
            rule: Top-level rule
            shape: Declared shape of the final value stack

        Returns:
            RunResult with the finalized value stack on success, or the
            ParseError on failure. Failure is data, not an exception.

        Raises:
            ValueStackShapeError: Final value stack does not match shape
            AbortSignalEscapedError: The abort signal surfaced in the plain run
            ErrorStackLimitExceededError: More than max_error_stacks stacks
            RuleDepthExceededError: Named rules nested beyond max_rule_depth
            ReentrantRunError: run() called from inside a running rule
        """
        if self._running:
            raise ReentrantRunError(ErrorTemplate.run_reentered())
        self._running = True
        try:
            self._tracker.reset()
            logger.debug("Run started, input length %d", self.input.length())
            if self._run_pass(rule, None):
                logger.debug("Rule matched at offset %d", self.cursor.offset)
                return RunResult.success(self.value_stack.finalize_as(shape))
            return RunResult.failure(self._build_parse_error(rule))
        finally:
            self._tracker.begin_run(None)
            self._running = False

    def format_error(self, error: ParseError) -> str:
        """Pretty print error in the context of this parser's input."""
        return ParseErrorFormatter().format(error, self.input)

    def _run_pass(self, rule: Rule, collecting_index: int | None) -> bool:
        """Run rule once from a clean state.

        Raises:
            RuleStackCollector: A diagnostic pass aborted (collecting only)
            AbortSignalEscapedError: The signal surfaced in the plain run
        """
        self.cursor.restart()
        self.depth_guard.reset()
        self._tracker.begin_run(collecting_index)
        try:
            return bool(rule())
        except RuleStackCollector:
            if collecting_index is None:
                raise AbortSignalEscapedError(ErrorTemplate.abort_signal_escaped()) from None
            raise

    def _build_parse_error(self, rule: Rule) -> ParseError:
        """Collect one rule stack per diagnostic pass until a pass completes."""
        deepest = self._tracker.deepest_offset
        logger.debug("Rule failed; collecting rule stacks at offset %d", deepest)

        stacks: list[RuleStack] = []
        while True:
            try:
                self._run_pass(rule, len(stacks))
            except RuleStackCollector as signal:
                if len(stacks) >= self.max_error_stacks:
                    raise ErrorStackLimitExceededError(
                        ErrorTemplate.error_stack_limit_exceeded(self.max_error_stacks, deepest)
                    ) from None
                stacks.append(RuleStack(tuple(reversed(signal.frames))))
                logger.debug("Pass %d collected: %s", len(stacks), stacks[-1])
                continue
            break

        logger.debug("Collected %d rule stack(s) at offset %d", len(stacks), deepest)
        return ParseError(position=resolve_position(deepest, self.input), stacks=tuple(stacks))
