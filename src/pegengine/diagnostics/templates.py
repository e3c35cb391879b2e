"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    # =========================================================================
    # SYNTAX ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def parse_failed(line: int, column: int) -> Diagnostic:
        """Input did not match the top-level rule.

        Args:
            line: 1-based line of the failure offset
            column: 1-based column of the failure offset

        Returns:
            Diagnostic for PARSE_FAILED
        """
        msg = f"Input does not match at line {line}, column {column}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_FAILED,
            message=msg,
            hint="Use Parser.format_error() for the expected alternatives",
        )

    @staticmethod
    def input_too_large(size: int, limit: int) -> Diagnostic:
        """Input exceeds the configured size limit.

        Args:
            size: Input length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for INPUT_TOO_LARGE
        """
        msg = f"Input size ({size:,} characters) exceeds maximum ({limit:,} characters)"
        return Diagnostic(
            code=DiagnosticCode.INPUT_TOO_LARGE,
            message=msg,
            hint="Configure max_input_size in the Parser constructor to increase the limit",
        )

    # =========================================================================
    # ENGINE CONTRACT VIOLATIONS (6000-6999)
    # =========================================================================

    @staticmethod
    def value_stack_underflow(operation: str) -> Diagnostic:
        """Pop or peek on an empty value stack.

        Args:
            operation: The stack operation that failed

        Returns:
            Diagnostic for VALUE_STACK_UNDERFLOW
        """
        msg = f"Cannot {operation} from an empty value stack"
        return Diagnostic(
            code=DiagnosticCode.VALUE_STACK_UNDERFLOW,
            message=msg,
            hint="An action consumes more values than its sub-rules push",
        )

    @staticmethod
    def value_stack_shape_mismatch(expected: str, actual: int) -> Diagnostic:
        """Final value stack does not match the requested shape.

        Args:
            expected: Description of the expected shape
            actual: Number of values actually on the stack

        Returns:
            Diagnostic for VALUE_STACK_SHAPE_MISMATCH
        """
        msg = f"Expected {expected} on the value stack, found {actual}"
        return Diagnostic(
            code=DiagnosticCode.VALUE_STACK_SHAPE_MISMATCH,
            message=msg,
            hint="Check the push, capture and action rules of the grammar",
        )

    @staticmethod
    def invalid_mark(depth: int, current_depth: int) -> Diagnostic:
        """Restore to a depth above the current stack.

        Args:
            depth: Depth recorded in the mark
            current_depth: Depth of the stack now

        Returns:
            Diagnostic for INVALID_MARK
        """
        msg = f"Cannot restore value stack to depth {depth}, current depth is {current_depth}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_MARK,
            message=msg,
            hint="A mark was reset after values below it had been popped",
        )

    @staticmethod
    def abort_signal_escaped() -> Diagnostic:
        """Abort signal raised outside a collection pass.

        Returns:
            Diagnostic for ABORT_SIGNAL_ESCAPED
        """
        return Diagnostic(
            code=DiagnosticCode.ABORT_SIGNAL_ESCAPED,
            message="Rule-stack abort signal raised outside a diagnostic pass",
            hint="Rules must only register mismatches, never raise the signal directly",
        )

    @staticmethod
    def error_stack_limit_exceeded(limit: int, offset: int) -> Diagnostic:
        """Alternative stacks at one offset exceed the limit.

        Args:
            limit: Configured maximum number of stacks
            offset: Failure offset

        Returns:
            Diagnostic for ERROR_STACK_LIMIT_EXCEEDED
        """
        msg = f"More than {limit} alternative rule stacks at offset {offset}"
        return Diagnostic(
            code=DiagnosticCode.ERROR_STACK_LIMIT_EXCEEDED,
            message=msg,
            hint=(
                "A rule explores unboundedly many alternatives at one offset; "
                "configure max_error_stacks if the grammar is legitimately this wide"
            ),
        )

    @staticmethod
    def rule_depth_exceeded(max_depth: int) -> Diagnostic:
        """Named rule nesting exceeds the limit.

        Args:
            max_depth: Configured maximum depth

        Returns:
            Diagnostic for RULE_DEPTH_EXCEEDED
        """
        msg = f"Maximum rule nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.RULE_DEPTH_EXCEEDED,
            message=msg,
            hint="Check for left recursion or configure max_rule_depth",
        )

    @staticmethod
    def run_reentered() -> Diagnostic:
        """Parser.run() called while a run is in flight on the same parser.

        Returns:
            Diagnostic for RUN_REENTERED
        """
        return Diagnostic(
            code=DiagnosticCode.RUN_REENTERED,
            message="Parser.run() called while another run is in progress",
            hint="Use one Parser instance per concurrent or nested parse",
        )
