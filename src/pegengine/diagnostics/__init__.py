"""Diagnostic system for pegengine errors.

Provides the exception hierarchy, structured diagnostics with codes and
hints, and the ParseError formatter.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    AbortSignalEscapedError,
    EngineContractError,
    ErrorStackLimitExceededError,
    ParseFailedError,
    PegEngineError,
    ReentrantRunError,
    RuleDepthExceededError,
    ValueStackError,
    ValueStackShapeError,
)
from .formatter import OutputFormat, ParseErrorFormatter
from .templates import ErrorTemplate

__all__ = [
    "AbortSignalEscapedError",
    "Diagnostic",
    "DiagnosticCode",
    "EngineContractError",
    "ErrorStackLimitExceededError",
    "ErrorTemplate",
    "OutputFormat",
    "ParseErrorFormatter",
    "ParseFailedError",
    "PegEngineError",
    "ReentrantRunError",
    "RuleDepthExceededError",
    "ValueStackError",
    "ValueStackShapeError",
]
