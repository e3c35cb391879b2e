"""pegengine - match-and-diagnose execution core for PEG parsers.

Runs a rule (any zero-argument callable) against an input with
transactional backtracking of cursor and semantic values. On failure it
re-parses the input to reconstruct which rule stacks were active at the
furthest offset reached, and returns that as a ParseError.

Public API:
    Parser - Execution engine for one input
    RuleBuilder - Rule combinators bound to a Parser
    RunResult - Value or ParseError
    ParseError - Failure position and alternative rule stacks
    ValueShape - Declared shape of the final value stack
    format_error - Render a ParseError against its input

Exceptions:
    PegEngineError - Base exception class
    ParseFailedError - Raised by RunResult.unwrap() on failure
    EngineContractError - Faulty rule construction (never a ParseError)
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    EngineContractError,
    OutputFormat,
    ParseErrorFormatter,
    ParseFailedError,
    PegEngineError,
)
from .engine import (
    ParseError,
    Parser,
    ParserInput,
    Position,
    RuleFrame,
    RuleKind,
    RuleStack,
    RunResult,
    StringInput,
    ValueShape,
)
from .rules import RuleBuilder


def format_error(
    error: ParseError,
    source: ParserInput | str,
    output_format: OutputFormat = OutputFormat.TEXT,
) -> str:
    """Render error against the input it was produced from."""
    if isinstance(source, str):
        source = StringInput(source)
    return ParseErrorFormatter(output_format=output_format).format(error, source)


# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("pegengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EngineContractError",
    "OutputFormat",
    "ParseError",
    "ParseErrorFormatter",
    "ParseFailedError",
    "Parser",
    "ParserInput",
    "PegEngineError",
    "Position",
    "RuleBuilder",
    "RuleFrame",
    "RuleKind",
    "RuleStack",
    "RunResult",
    "StringInput",
    "ValueShape",
    "__version__",
    "format_error",
]
