"""Shared pytest fixtures for calcapi tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from calcapi.api.app import create_app
from calcapi.config import CalcEnv, HistoryBackend, ServerConfig
from calcapi.history.repository import InMemoryHistoryRepository, SQLiteHistoryRepository
from calcapi.service import CalculatorService


@pytest.fixture
def config() -> ServerConfig:
    """Return a test configuration using in-memory history."""
    return ServerConfig(env=CalcEnv.TEST, history_backend=HistoryBackend.MEMORY)


@pytest.fixture
def memory_repo() -> InMemoryHistoryRepository:
    """Return an empty in-memory history repository."""
    return InMemoryHistoryRepository()


@pytest.fixture
def sqlite_repo(tmp_path: Path) -> SQLiteHistoryRepository:
    """Return an empty SQLite history repository in a temp directory."""
    return SQLiteHistoryRepository(tmp_path / "history.db")


@pytest.fixture
def service(memory_repo: InMemoryHistoryRepository) -> CalculatorService:
    """Return a calculator service backed by the in-memory repository."""
    return CalculatorService(memory_repo, max_expression_length=50, max_nesting_depth=10)


@pytest.fixture
def client(memory_repo: InMemoryHistoryRepository, config: ServerConfig) -> TestClient:
    """Return a TestClient for an app backed by the in-memory repository."""
    return TestClient(create_app(memory_repo, config))
