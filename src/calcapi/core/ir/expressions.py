"""
Expression AST for arithmetic calculations.

The AST is a closed, discriminated union of three frozen node types:

- NumberLiteral: a floating-point leaf
- UnaryExpression: negation of a sub-expression
- BinaryExpression: ``+``, ``-``, ``*`` or ``/`` over two sub-expressions

Every node carries a ``type`` tag so a tree dumps to plain JSON without
loss:

    {"type": "binary", "operator": "*",
     "left": {"type": "number", "value": 3.0},
     "right": {"type": "number", "value": 4.0}}
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class UnaryOp(StrEnum):
    """Unary operators."""

    NEG = "-"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A numeric literal."""

    type: Literal["number"] = "number"
    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if not math.isfinite(self.value):
            return repr(self.value)
        if self.value.is_integer():
            return str(int(self.value))
        # Shortest round-tripping digits, without an exponent
        return format(Decimal(repr(self.value)), "f")


class UnaryExpression(BaseModel):
    """Unary operation: op operand."""

    type: Literal["unary"] = "unary"
    operator: UnaryOp = UnaryOp.NEG
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.operator.value}{self.operand}"


class BinaryExpression(BaseModel):
    """Binary operation: left op right."""

    type: Literal["binary"] = "binary"
    operator: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Annotated[
    NumberLiteral | UnaryExpression | BinaryExpression,
    Field(discriminator="type"),
]

UnaryExpression.model_rebuild()
BinaryExpression.model_rebuild()

_EXPR_ADAPTER: TypeAdapter[Expr] = TypeAdapter(Expr)


def expr_to_dict(expr: Expr) -> dict[str, object]:
    """Dump an AST to JSON-compatible tagged dicts."""
    data: dict[str, object] = _EXPR_ADAPTER.dump_python(expr, mode="json")
    return data
