"""Backtracking execution engine.

Module Organization:
- input.py: ParserInput protocol and StringInput
- position.py: Offset to line/column resolution
- value_stack.py: Checkpointable semantic value stack
- tracker.py: Mismatch tracking and the rule-stack abort signal
- cursor.py: Backtracking cursor and Mark
- frames.py: RuleFrame, RuleStack, ParseError, RunResult
- parser.py: Parser.run() and the error-stack builder

Public API:
    Parser: Execution engine for one input
    RunResult, ParseError, RuleStack, RuleFrame, RuleKind: Result data
"""

from pegengine.engine.cursor import Cursor, Mark
from pegengine.engine.frames import ParseError, RuleFrame, RuleKind, RuleStack, RunResult
from pegengine.engine.input import ParserInput, StringInput
from pegengine.engine.parser import Parser, Rule
from pegengine.engine.position import Position, resolve_position
from pegengine.engine.value_stack import ValueShape, ValueStack

__all__ = [
    "Cursor",
    "Mark",
    "ParseError",
    "Parser",
    "ParserInput",
    "Position",
    "Rule",
    "RuleFrame",
    "RuleKind",
    "RuleStack",
    "RunResult",
    "StringInput",
    "ValueShape",
    "ValueStack",
    "resolve_position",
]
