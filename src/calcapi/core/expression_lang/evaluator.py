"""
Expression evaluator for arithmetic ASTs.

Pure evaluation with no I/O and no side effects. Does NOT use Python's eval().
Arithmetic follows IEEE-754 double semantics; overflow saturates to
infinity without an error.
"""

from __future__ import annotations

from calcapi.core.errors import DivisionByZeroError
from calcapi.core.ir.expressions import (
    BinaryExpression,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpression,
    UnaryOp,
)


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a float.

    Raises:
        DivisionByZeroError: If a divisor evaluates to zero.
    """
    if isinstance(expr, NumberLiteral):
        return expr.value

    if isinstance(expr, UnaryExpression):
        return _evaluate_unary(expr)

    if isinstance(expr, BinaryExpression):
        return _evaluate_binary(expr)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _evaluate_unary(expr: UnaryExpression) -> float:
    val = evaluate(expr.operand)
    if expr.operator == UnaryOp.NEG:
        return -val
    raise TypeError(f"Unknown unary op: {expr.operator}")


def _evaluate_binary(expr: BinaryExpression) -> float:
    """Evaluate left before right, then apply the operator."""
    left = evaluate(expr.left)
    right = evaluate(expr.right)

    if expr.operator == BinaryOp.ADD:
        return left + right
    if expr.operator == BinaryOp.SUB:
        return left - right
    if expr.operator == BinaryOp.MUL:
        return left * right
    if expr.operator == BinaryOp.DIV:
        if right == 0:
            raise DivisionByZeroError(expr.right)
        return left / right

    raise TypeError(f"Unknown binary op: {expr.operator}")
