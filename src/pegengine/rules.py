"""Rule combinators: grammars as ordinary Python values.

A RuleBuilder is bound to one Parser and returns zero-argument callables
that match against that parser's cursor. Composition is plain function
composition; there is no grammar text and no code generation.

Diagnostics:
    Every rule that can contain a mismatch catches the rule-stack abort
    signal, appends its own RuleFrame and re-raises. Frames therefore arrive
    innermost first; Parser reverses them to root-first order.

Backtracking:
    A failing rule leaves cursor and value stack as it found them. Leaf
    matchers register the mismatch at the offset of the failed comparison
    before rolling back.

Example:
    >>> parser = Parser("1+2")
    >>> r = RuleBuilder(parser)
    >>> digit = r.named("digit", r.capture(r.char_range("0", "9")))
    >>> total = r.seq(digit, r.ch("+"), digit, r.action(2, lambda a, b: int(a) + int(b)), r.eoi())
    >>> parser.run(total, shape=ValueShape.SINGLE).value
    3
"""

from collections.abc import Callable
from typing import Any

from pegengine.engine.frames import RuleFrame, RuleKind
from pegengine.engine.parser import Parser, Rule
from pegengine.engine.tracker import RuleStackCollector

__all__ = ["RuleBuilder"]


class RuleBuilder:
    """Factory for rules bound to one Parser.

    Attributes:
        parser: Parser whose cursor and value stack the rules operate on
    """

    __slots__ = ("_cursor", "parser")

    def __init__(self, parser: Parser) -> None:
        self.parser = parser
        self._cursor = parser.cursor

    # =========================================================================
    # LEAF MATCHERS
    # =========================================================================

    def ch(self, char: str) -> Rule:
        """Match exactly one character."""
        if len(char) != 1:
            msg = f"ch() expects a single character, got {char!r}"
            raise ValueError(msg)
        cursor = self._cursor
        frame = RuleFrame(RuleKind.CHAR_MATCH, detail=char)

        def match_char() -> bool:
            try:
                if not cursor.is_eoi and cursor.peek() == char:
                    cursor.advance()
                    return True
                cursor.register_char_mismatch()
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_char

    def string(self, text: str) -> Rule:
        """Match a literal string; the mismatch is registered at the first differing character."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.STRING_MATCH, detail=text)

        def match_string() -> bool:
            try:
                start = cursor.mark_cursor()
                for expected in text:
                    if cursor.is_eoi or cursor.peek() != expected:
                        cursor.register_char_mismatch()
                        cursor.reset_cursor(start)
                        return False
                    cursor.advance()
                return True
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_string

    def any_of(self, chars: str) -> Rule:
        """Match one character from chars."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.ANY_OF, detail=chars)
        allowed = frozenset(chars)

        def match_any_of() -> bool:
            try:
                if not cursor.is_eoi and cursor.peek() in allowed:
                    cursor.advance()
                    return True
                cursor.register_char_mismatch()
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_any_of

    def char_range(self, low: str, high: str) -> Rule:
        """Match one character c with low <= c <= high."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.CHAR_RANGE, detail=f"{low}-{high}")

        def match_range() -> bool:
            try:
                if not cursor.is_eoi and low <= cursor.peek() <= high:
                    cursor.advance()
                    return True
                cursor.register_char_mismatch()
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_range

    def any_char(self) -> Rule:
        """Match any single character; fails only at end of input."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.ANY_CHAR)

        def match_any() -> bool:
            try:
                if not cursor.is_eoi:
                    cursor.advance()
                    return True
                cursor.register_char_mismatch()
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_any

    def eoi(self) -> Rule:
        """Match the end of input without consuming."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.END_OF_INPUT)

        def match_eoi() -> bool:
            try:
                if cursor.is_eoi:
                    return True
                cursor.register_char_mismatch()
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_eoi

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    def seq(self, *rules: Rule) -> Rule:
        """Match all rules in order; on failure restore cursor and values."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.SEQUENCE)

        def match_seq() -> bool:
            try:
                mark = cursor.mark()
                for rule in rules:
                    if not rule():
                        cursor.reset(mark)
                        return False
                return True
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_seq

    def first_of(self, *alternatives: Rule) -> Rule:
        """Ordered choice: the first matching alternative wins."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.FIRST_OF)

        def match_first_of() -> bool:
            try:
                mark = cursor.mark()
                for alternative in alternatives:
                    if alternative():
                        return True
                    cursor.reset(mark)
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_first_of

    def optional(self, rule: Rule) -> Rule:
        cursor = self._cursor
        frame = RuleFrame(RuleKind.OPTIONAL)

        def match_optional() -> bool:
            try:
                mark = cursor.mark()
                if not rule():
                    cursor.reset(mark)
                return True
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_optional

    def zero_or_more(self, rule: Rule) -> Rule:
        """Repeat rule greedily; stops when an iteration consumes nothing."""
        return self._repeat(rule, RuleFrame(RuleKind.ZERO_OR_MORE), minimum=0)

    def one_or_more(self, rule: Rule) -> Rule:
        return self._repeat(rule, RuleFrame(RuleKind.ONE_OR_MORE), minimum=1)

    def _repeat(self, rule: Rule, frame: RuleFrame, minimum: int) -> Rule:
        cursor = self._cursor

        def match_repeat() -> bool:
            try:
                start = cursor.mark()
                count = 0
                while True:
                    mark = cursor.mark()
                    if not rule():
                        cursor.reset(mark)
                        break
                    count += 1
                    if cursor.offset == mark.offset:
                        break
                if count < minimum:
                    cursor.reset(start)
                    return False
                return True
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_repeat

    def and_predicate(self, rule: Rule) -> Rule:
        """Succeed if rule matches here; never consumes."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.AND_PREDICATE)

        def match_and() -> bool:
            try:
                mark = cursor.mark()
                matched = bool(rule())
                cursor.reset(mark)
                return matched
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_and

    def not_predicate(self, rule: Rule) -> Rule:
        """Succeed if rule does not match here; never consumes."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.NOT_PREDICATE)

        def match_not() -> bool:
            try:
                mark = cursor.mark()
                matched = bool(rule())
                cursor.reset(mark)
                return not matched
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_not

    # =========================================================================
    # VALUES
    # =========================================================================

    def capture(self, rule: Rule) -> Rule:
        """Push the text matched by rule."""
        cursor = self._cursor
        frame = RuleFrame(RuleKind.CAPTURE)

        def match_capture() -> bool:
            try:
                start = cursor.mark_cursor()
                if rule():
                    cursor.value_stack.push(cursor.slice_input(start))
                    return True
                return False
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_capture

    def push(self, value: Any) -> Rule:
        """Push a constant value; always matches."""
        value_stack = self._cursor.value_stack

        def push_value() -> bool:
            value_stack.push(value)
            return True

        return push_value

    def action(self, arity: int, function: Callable[..., Any]) -> Rule:
        """Pop arity values (bottom first), push function(*values); always matches.

        Raises:
            ValueStackError: At match time, if fewer than arity values are held
        """
        value_stack = self._cursor.value_stack

        def run_action() -> bool:
            values = value_stack.pop_many(arity)
            value_stack.push(function(*values))
            return True

        return run_action

    # =========================================================================
    # NAMING AND RECURSION
    # =========================================================================

    def named(self, name: str, rule: Rule) -> Rule:
        """Label rule for diagnostics and guard its nesting depth."""
        depth_guard = self.parser.depth_guard
        frame = RuleFrame(RuleKind.NAMED, name=name)

        def match_named() -> bool:
            try:
                with depth_guard:
                    return bool(rule())
            except RuleStackCollector as signal:
                signal.save(frame)
                raise

        return match_named

    def lazy(self, factory: Callable[[], Rule]) -> Rule:
        """Defer building a rule until first use, for recursive grammars."""
        resolved: list[Rule] = []

        def match_lazy() -> bool:
            if not resolved:
                resolved.append(factory())
            return bool(resolved[0]())

        return match_lazy
