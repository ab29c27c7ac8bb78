"""
History repositories - persistence for calculation records.

Implementations:
- InMemoryHistoryRepository: process-local list (default; tests, demos)
- SQLiteHistoryRepository: file-backed store using sqlite3

Both return records in insertion order. Swap implementations at the
composition root via :func:`create_repository`.
"""

from __future__ import annotations

import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from calcapi.history.models import HistoryItem

if TYPE_CHECKING:
    from calcapi.config import ServerConfig


class HistoryRepository(ABC):
    """Abstract repository contract for history persistence."""

    @abstractmethod
    def save(self, item: HistoryItem) -> None:
        """Persist a new history record."""

    @abstractmethod
    def find_all(self, take: int, skip: int = 0) -> list[HistoryItem]:
        """
        Return a page of history items in insertion order.

        Args:
            take: Max number of items to return
            skip: Number of items to skip from the start
        """

    @abstractmethod
    def count(self) -> int:
        """Total number of stored records."""

    @abstractmethod
    def clear(self) -> None:
        """Delete all records."""


class InMemoryHistoryRepository(HistoryRepository):
    """
    In-memory history store.

    Data lives only for the lifetime of the process.
    """

    def __init__(self) -> None:
        self._items: list[HistoryItem] = []
        self._lock = threading.Lock()

    def save(self, item: HistoryItem) -> None:
        with self._lock:
            self._items.append(item)

    def find_all(self, take: int, skip: int = 0) -> list[HistoryItem]:
        with self._lock:
            return self._items[skip : skip + take]

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class SQLiteHistoryRepository(HistoryRepository):
    """
    SQLite-backed history store.

    The AST is stored as JSON text; ordering follows the table's rowid.
    """

    TABLE = "history"

    def __init__(self, db_path: str | Path = ".calcapi/history.db") -> None:
        """
        Initialize the repository and create the table if needed.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._create_table()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Get a database connection context manager.

        Yields:
            SQLite connection
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _create_table(self) -> None:
        with self.connection() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
                "id TEXT PRIMARY KEY, "
                "expression TEXT NOT NULL, "
                "computation TEXT NOT NULL, "
                "result REAL NOT NULL, "
                "created_at TEXT NOT NULL)"
            )

    def save(self, item: HistoryItem) -> None:
        with self.connection() as conn:
            conn.execute(
                f"INSERT INTO {self.TABLE} (id, expression, computation, result, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    item.id,
                    item.expression,
                    json.dumps(item.computation),
                    item.result,
                    item.created_at.isoformat(),
                ),
            )

    def find_all(self, take: int, skip: int = 0) -> list[HistoryItem]:
        with self.connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM {self.TABLE} ORDER BY rowid LIMIT ? OFFSET ?",
                (take, skip),
            ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def count(self) -> int:
        with self.connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) FROM {self.TABLE}").fetchone()
        return int(row[0])

    def clear(self) -> None:
        with self.connection() as conn:
            conn.execute(f"DELETE FROM {self.TABLE}")

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> HistoryItem:
        return HistoryItem(
            id=row["id"],
            expression=row["expression"],
            computation=json.loads(row["computation"]),
            result=row["result"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


def create_repository(config: ServerConfig) -> HistoryRepository:
    """Build the repository selected by ``config.history_backend``."""
    from calcapi.config import HistoryBackend

    if config.history_backend == HistoryBackend.SQLITE:
        return SQLiteHistoryRepository(config.database_path)
    return InMemoryHistoryRepository()
