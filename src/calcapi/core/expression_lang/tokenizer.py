"""
Tokenizer for arithmetic expressions.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from calcapi.core.errors import InvalidExpressionError


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Grouping
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    lexeme: str
    position: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, pos={self.position})"


_SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_NUMBER_CHARS = frozenset("0123456789.")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    The returned list always ends with exactly one EOF token positioned at
    ``len(source)``.

    Raises:
        InvalidExpressionError: On an unrecognized character or a malformed
            number.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        if c in _NUMBER_CHARS:
            i, tok = _read_number(source, i)
            tokens.append(tok)
            continue

        kind = _SINGLE_CHAR_TOKENS.get(c)
        if kind is not None:
            tokens.append(Token(kind, c, i))
            i += 1
            continue

        raise InvalidExpressionError(f"unexpected character {c!r} at position {i}", i)

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens


def _read_number(source: str, start: int) -> tuple[int, Token]:
    """Read a maximal run of digits and at most one '.'."""
    i = start
    n = len(source)
    seen_dot = False

    while i < n and source[i] in _NUMBER_CHARS:
        if source[i] == ".":
            if seen_dot:
                raise InvalidExpressionError(f"unexpected '.' at position {i}", i)
            seen_dot = True
        i += 1

    lexeme = source[start:i]
    if lexeme == ".":
        raise InvalidExpressionError(f"unexpected '.' at position {start}", start)
    return i, Token(TokenKind.NUMBER, lexeme, start)
