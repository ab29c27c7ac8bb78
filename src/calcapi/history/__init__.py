"""Calculation history: record model and repositories."""

from calcapi.history.models import HistoryItem, HistoryPage
from calcapi.history.repository import (
    HistoryRepository,
    InMemoryHistoryRepository,
    SQLiteHistoryRepository,
    create_repository,
)

__all__ = [
    "HistoryItem",
    "HistoryPage",
    "HistoryRepository",
    "InMemoryHistoryRepository",
    "SQLiteHistoryRepository",
    "create_repository",
]
