"""Tests for the calculator service use cases."""

from __future__ import annotations

import logging

import pytest

from calcapi.core.errors import DivisionByZeroError, InvalidExpressionError
from calcapi.history.repository import InMemoryHistoryRepository
from calcapi.service import CalculatorService


class TestCalculateAndStore:
    """calculate_and_store evaluates and records expressions."""

    def test_returns_record(self, service: CalculatorService) -> None:
        item = service.calculate_and_store("(10 + 2) * 3 - 4 / 2")
        assert item.expression == "(10 + 2) * 3 - 4 / 2"
        assert item.result == 34
        assert item.computation["type"] == "binary"
        assert item.computation["operator"] == "-"

    def test_persists_record(
        self, service: CalculatorService, memory_repo: InMemoryHistoryRepository
    ) -> None:
        item = service.calculate_and_store("1 + 1")
        assert memory_repo.find_all(10, 0) == [item]

    def test_invalid_expression_not_stored(
        self, service: CalculatorService, memory_repo: InMemoryHistoryRepository
    ) -> None:
        with pytest.raises(InvalidExpressionError):
            service.calculate_and_store("2 +")
        assert memory_repo.count() == 0

    def test_division_by_zero_not_stored(
        self, service: CalculatorService, memory_repo: InMemoryHistoryRepository
    ) -> None:
        with pytest.raises(DivisionByZeroError):
            service.calculate_and_store("1 / 0")
        assert memory_repo.count() == 0

    def test_length_limit(self, service: CalculatorService) -> None:
        with pytest.raises(InvalidExpressionError, match="longer than 50") as exc_info:
            service.calculate_and_store("1+" * 30 + "1")
        assert exc_info.value.position == 50

    def test_nesting_limit(self, service: CalculatorService) -> None:
        with pytest.raises(InvalidExpressionError, match="nesting"):
            service.calculate_and_store("(" * 11 + "1" + ")" * 11)

    def test_flat_chain_over_default_limit(self, memory_repo: InMemoryHistoryRepository) -> None:
        svc = CalculatorService(memory_repo)
        with pytest.raises(InvalidExpressionError, match="nesting deeper than 100") as exc_info:
            svc.calculate_and_store("+".join(["1"] * 500))
        assert exc_info.value.position == 201
        assert memory_repo.count() == 0

    def test_flat_chain_at_default_limit(self, memory_repo: InMemoryHistoryRepository) -> None:
        svc = CalculatorService(memory_repo)
        item = svc.calculate_and_store("+".join(["1"] * 101))
        assert item.result == 101

    def test_unlimited_nesting(self, memory_repo: InMemoryHistoryRepository) -> None:
        svc = CalculatorService(memory_repo, max_nesting_depth=None)
        assert svc.calculate_and_store("-" * 40 + "1").result == 1

    def test_logs_rejections(
        self, service: CalculatorService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="calcapi.service"):
            with pytest.raises(DivisionByZeroError):
                service.calculate_and_store("1 / 0")
        record = next(r for r in caplog.records if r.message == "Expression rejected")
        assert record.context["error"] == "DivisionByZeroError"  # type: ignore[attr-defined]


class TestGetHistory:
    """get_history pages through stored records."""

    def test_empty_page(self, service: CalculatorService) -> None:
        page = service.get_history()
        assert page.items == []
        assert (page.take, page.skip) == (20, 0)

    def test_paging(self, service: CalculatorService) -> None:
        for expr in ["1+1", "2+2", "3+3"]:
            service.calculate_and_store(expr)
        page = service.get_history(take=1, skip=1)
        assert [item.result for item in page.items] == [4]
        assert (page.take, page.skip) == (1, 1)
