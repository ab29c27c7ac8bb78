"""
Error types for expression tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from calcapi.core.ir.expressions import Expr


class CalcError(Exception):
    """Base exception for all calcapi errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidExpressionError(CalcError):
    """
    Raised when an expression cannot be tokenized or parsed.

    Examples:
    - Unrecognized characters
    - Malformed numbers (``3.1.4``, a lone ``.``)
    - Unexpected or missing tokens
    - Unmatched parentheses
    - Trailing tokens after a complete expression

    Attributes:
        detail: Description of the failure without the common prefix
        position: Zero-based offset of the offending character or token
    """

    def __init__(self, detail: str, position: int) -> None:
        self.detail = detail
        self.position = position
        super().__init__(f"Invalid expression: {detail}")


class DivisionByZeroError(CalcError):
    """
    Raised when a divisor evaluates to zero.

    Carries no source position; ``operand`` is the right-hand sub-tree
    whose value was zero, when known.
    """

    def __init__(self, operand: Expr | None = None) -> None:
        self.operand = operand
        super().__init__("Division by zero")
