"""
Calculator service - the use cases behind the HTTP API.

- calculate_and_store: evaluate an expression and persist the record
- get_history: page through stored records
"""

from __future__ import annotations

import logging

from calcapi.config import DEFAULT_MAX_EXPRESSION_LENGTH, DEFAULT_MAX_NESTING_DEPTH
from calcapi.core.errors import CalcError, InvalidExpressionError
from calcapi.core.expression_lang import evaluate, parse, tokenize
from calcapi.core.ir.expressions import expr_to_dict
from calcapi.history.models import HistoryItem, HistoryPage
from calcapi.history.repository import HistoryRepository
from calcapi.logging import log_with_context

logger = logging.getLogger(__name__)


class CalculatorService:
    """Parses, evaluates and records expressions."""

    def __init__(
        self,
        repository: HistoryRepository,
        *,
        max_expression_length: int = DEFAULT_MAX_EXPRESSION_LENGTH,
        max_nesting_depth: int | None = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        self.repository = repository
        self.max_expression_length = max_expression_length
        self.max_nesting_depth = max_nesting_depth

    def calculate_and_store(self, expression: str) -> HistoryItem:
        """Evaluate ``expression`` and persist the resulting record.

        Raises:
            InvalidExpressionError: If the expression is too long or malformed.
            DivisionByZeroError: If a divisor evaluates to zero.
        """
        try:
            if len(expression) > self.max_expression_length:
                raise InvalidExpressionError(
                    f"expression longer than {self.max_expression_length} characters",
                    self.max_expression_length,
                )
            ast = parse(tokenize(expression), max_depth=self.max_nesting_depth)
            result = evaluate(ast)
        except CalcError as e:
            log_with_context(
                logger,
                logging.INFO,
                "Expression rejected",
                error=type(e).__name__,
                detail=e.message,
            )
            raise

        item = HistoryItem(expression=expression, computation=expr_to_dict(ast), result=result)
        self.repository.save(item)
        log_with_context(logger, logging.DEBUG, "Evaluated expression", id=item.id, result=result)
        return item

    def get_history(self, take: int = 20, skip: int = 0) -> HistoryPage:
        """Return one page of history in insertion order."""
        items = self.repository.find_all(take, skip)
        return HistoryPage(items=items, take=take, skip=skip)
