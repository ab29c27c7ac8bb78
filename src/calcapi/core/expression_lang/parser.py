"""
Recursive descent parser for arithmetic expressions.

Grammar (precedence low to high, binary operators left-associative):
    expression → term (("+" | "-") term)*
    term       → factor (("*" | "/") factor)*
    factor     → "-" factor | "(" expression ")" | NUMBER
"""

from __future__ import annotations

from collections.abc import Sequence

from calcapi.core.errors import InvalidExpressionError
from calcapi.core.expression_lang.tokenizer import Token, TokenKind
from calcapi.core.ir.expressions import (
    BinaryExpression,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpression,
    UnaryOp,
)

_ADD_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MUL_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}

_KIND_NAMES: dict[TokenKind, str] = {
    TokenKind.NUMBER: "number",
    TokenKind.PLUS: "'+'",
    TokenKind.MINUS: "'-'",
    TokenKind.STAR: "'*'",
    TokenKind.SLASH: "'/'",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.EOF: "end of input",
}


# A parsed node and its tree height
_Parsed = tuple[Expr, int]


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    if tok.kind == TokenKind.NUMBER:
        return f"number {tok.lexeme!r}"
    return f"{tok.lexeme!r}"


class _Parser:
    """Recursive descent parser over a token sequence.

    Each grammar rule returns the node together with its tree height (a
    literal has height 0) so ``max_depth`` bounds how deep the finished tree
    is, not only how deeply the source nests.
    """

    def __init__(self, tokens: Sequence[Token], max_depth: int | None = None) -> None:
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise InvalidExpressionError(
                f"expected {_KIND_NAMES[kind]} but got {_describe(tok)} at position {tok.position}",
                tok.position,
            )
        return self.advance()

    def _too_deep(self, tok: Token) -> InvalidExpressionError:
        return InvalidExpressionError(
            f"nesting deeper than {self.max_depth} levels at position {tok.position}",
            tok.position,
        )

    def _enter(self, tok: Token) -> None:
        self.depth += 1
        if self.max_depth is not None and self.depth > self.max_depth:
            raise self._too_deep(tok)

    def _leave(self) -> None:
        self.depth -= 1

    def _check_height(self, height: int, tok: Token) -> int:
        if self.max_depth is not None and height > self.max_depth:
            raise self._too_deep(tok)
        return height

    # -- Grammar rules --

    def parse_expression(self) -> _Parsed:
        """term (('+' | '-') term)*"""
        left, height = self.parse_term()
        while self.current.kind in _ADD_OPS:
            op_tok = self.advance()
            right, right_height = self.parse_term()
            height = self._check_height(max(height, right_height) + 1, op_tok)
            left = BinaryExpression(operator=_ADD_OPS[op_tok.kind], left=left, right=right)
        return left, height

    def parse_term(self) -> _Parsed:
        """factor (('*' | '/') factor)*"""
        left, height = self.parse_factor()
        while self.current.kind in _MUL_OPS:
            op_tok = self.advance()
            right, right_height = self.parse_factor()
            height = self._check_height(max(height, right_height) + 1, op_tok)
            left = BinaryExpression(operator=_MUL_OPS[op_tok.kind], left=left, right=right)
        return left, height

    def parse_factor(self) -> _Parsed:
        """'-' factor | '(' expression ')' | NUMBER"""
        tok = self.current

        if tok.kind == TokenKind.MINUS:
            self.advance()
            self._enter(tok)
            operand, height = self.parse_factor()
            self._leave()
            height = self._check_height(height + 1, tok)
            return UnaryExpression(operator=UnaryOp.NEG, operand=operand), height

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            self._enter(tok)
            parsed = self.parse_expression()
            self.expect(TokenKind.RPAREN)
            self._leave()
            return parsed

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(value=float(tok.lexeme)), 0

        raise InvalidExpressionError(
            f"expected number, '-' or '(' but got {_describe(tok)} at position {tok.position}",
            tok.position,
        )


def parse(tokens: Sequence[Token], *, max_depth: int | None = None) -> Expr:
    """Parse a token sequence into an AST.

    Args:
        tokens: Output of :func:`tokenize`, terminated by an EOF token.
        max_depth: Optional limit on the height of the resulting tree and on
            nested parentheses. ``None`` means unlimited (bounded only by the
            interpreter stack).

    Returns:
        Root node of the parsed expression.

    Raises:
        InvalidExpressionError: If the tokens do not form a single complete
            expression.
    """
    if not tokens or tokens[-1].kind != TokenKind.EOF:
        end = tokens[-1].position + len(tokens[-1].lexeme) if tokens else 0
        raise InvalidExpressionError("token sequence is not terminated by end of input", end)

    parser = _Parser(tokens, max_depth=max_depth)
    expr, _ = parser.parse_expression()

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        tok = parser.current
        raise InvalidExpressionError(
            f"unexpected {_describe(tok)} at position {tok.position}",
            tok.position,
        )

    return expr
