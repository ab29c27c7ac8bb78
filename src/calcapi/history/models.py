"""
History record types.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HistoryItem(BaseModel):
    """
    A single calculation history record.

    ``computation`` holds the AST in its tagged-dict form, so this module
    stays independent of the expression node classes.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="UUID4 identifier")
    expression: str = Field(description="Expression text as submitted")
    computation: dict[str, Any] = Field(description="Parsed AST as tagged dicts")
    result: float = Field(description="Evaluated result")
    created_at: datetime = Field(default_factory=_utcnow)

    # Overflowed results serialize as "inf"/"-inf"
    model_config = ConfigDict(frozen=True, ser_json_inf_nan="strings")


class HistoryPage(BaseModel):
    """One page of history, in insertion order."""

    items: list[HistoryItem]
    take: int
    skip: int
