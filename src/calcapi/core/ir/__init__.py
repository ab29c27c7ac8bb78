"""AST types for arithmetic expressions."""

from calcapi.core.ir.expressions import (
    BinaryExpression,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpression,
    UnaryOp,
    expr_to_dict,
)

__all__ = [
    "BinaryExpression",
    "BinaryOp",
    "Expr",
    "NumberLiteral",
    "UnaryExpression",
    "UnaryOp",
    "expr_to_dict",
]
