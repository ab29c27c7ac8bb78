"""
Arithmetic expression language.

Tokenizer, parser, and evaluator for ``+ - * /`` expressions with
parentheses and unary minus.

Usage:
    from calcapi.core.expression_lang import evaluate, parse, tokenize

    result = evaluate(parse(tokenize("(10 + 2) * 3 - 4 / 2")))
    # result == 34.0
"""

from __future__ import annotations

from calcapi.core.expression_lang.evaluator import evaluate
from calcapi.core.expression_lang.parser import parse
from calcapi.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from calcapi.core.ir.expressions import Expr


def calculate(source: str, *, max_depth: int | None = None) -> float:
    """Tokenize, parse, and evaluate ``source`` in one call."""
    return evaluate(parse(tokenize(source), max_depth=max_depth))


def render(expr: Expr) -> str:
    """Fully parenthesized infix form of an AST, e.g. ``(2 + (3 * 4))``."""
    return str(expr)


__all__ = ["Token", "TokenKind", "calculate", "evaluate", "parse", "render", "tokenize"]
