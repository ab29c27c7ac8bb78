"""
calcapi - arithmetic expression evaluation as a library, CLI, and HTTP API.

The expression pipeline lives in :mod:`calcapi.core.expression_lang`:
tokenize, parse into an immutable AST, evaluate to a float.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import CalcError, DivisionByZeroError, InvalidExpressionError
from .core.expression_lang import calculate, evaluate, parse, render, tokenize

__version__ = get_version()

__all__ = [
    "CalcError",
    "DivisionByZeroError",
    "InvalidExpressionError",
    "__version__",
    "calculate",
    "evaluate",
    "parse",
    "render",
    "tokenize",
]
