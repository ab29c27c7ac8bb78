"""Tests for history repositories (in-memory and SQLite)."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from calcapi.config import HistoryBackend, ServerConfig
from calcapi.history.models import HistoryItem
from calcapi.history.repository import (
    HistoryRepository,
    InMemoryHistoryRepository,
    SQLiteHistoryRepository,
    create_repository,
)


def make_item(expression: str, result: float) -> HistoryItem:
    return HistoryItem(
        expression=expression,
        computation={"type": "number", "value": result},
        result=result,
    )


@pytest.fixture(params=["memory", "sqlite"])
def repo(request: pytest.FixtureRequest, tmp_path: Path) -> HistoryRepository:
    """Run each contract test against both implementations."""
    if request.param == "sqlite":
        return SQLiteHistoryRepository(tmp_path / "history.db")
    return InMemoryHistoryRepository()


class TestHistoryItem:
    """HistoryItem defaults."""

    def test_generates_id_and_timestamp(self) -> None:
        item = make_item("1", 1)
        other = make_item("1", 1)
        assert item.id != other.id
        assert item.created_at.tzinfo is not None

    def test_json_shape(self) -> None:
        item = make_item("2", 2)
        data = item.model_dump(mode="json")
        assert set(data) == {"id", "expression", "computation", "result", "created_at"}


class TestRepositoryContract:
    """Behaviour shared by all repository implementations."""

    def test_empty(self, repo: HistoryRepository) -> None:
        assert repo.find_all(20, 0) == []
        assert repo.count() == 0

    def test_insertion_order(self, repo: HistoryRepository) -> None:
        for i in range(3):
            repo.save(make_item(f"{i}+0", i))
        assert [item.result for item in repo.find_all(10, 0)] == [0, 1, 2]
        assert repo.count() == 3

    def test_take_and_skip(self, repo: HistoryRepository) -> None:
        for i in range(5):
            repo.save(make_item(str(i), i))
        assert [item.result for item in repo.find_all(2, 1)] == [1, 2]
        assert [item.result for item in repo.find_all(10, 4)] == [4]
        assert repo.find_all(10, 5) == []

    def test_round_trip_preserves_fields(self, repo: HistoryRepository) -> None:
        item = HistoryItem(
            expression="3 * 4",
            computation={
                "type": "binary",
                "operator": "*",
                "left": {"type": "number", "value": 3.0},
                "right": {"type": "number", "value": 4.0},
            },
            result=12.0,
            created_at=datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
        )
        repo.save(item)
        assert repo.find_all(1, 0) == [item]

    def test_clear(self, repo: HistoryRepository) -> None:
        repo.save(make_item("1", 1))
        repo.clear()
        assert repo.count() == 0


class TestSQLiteRepository:
    """SQLite-specific behaviour."""

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "history.db"
        SQLiteHistoryRepository(db_path).save(make_item("1 + 1", 2))
        reopened = SQLiteHistoryRepository(db_path)
        assert [item.expression for item in reopened.find_all(10, 0)] == ["1 + 1"]


class TestCreateRepository:
    """Repository selection from configuration."""

    def test_memory_default(self) -> None:
        assert isinstance(create_repository(ServerConfig()), InMemoryHistoryRepository)

    def test_sqlite(self, tmp_path: Path) -> None:
        config = ServerConfig(
            history_backend=HistoryBackend.SQLITE,
            database_path=tmp_path / "h.db",
        )
        repo = create_repository(config)
        assert isinstance(repo, SQLiteHistoryRepository)
        assert (tmp_path / "h.db").exists()
