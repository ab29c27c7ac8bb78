"""
Request/response models for the calculator API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CalculateRequest(BaseModel):
    """Request body for POST /calculator."""

    expression: str = Field(
        ...,
        min_length=1,
        strict=True,
        description="Arithmetic expression, e.g. '(10 + 2) * 3'",
    )


class ErrorResponse(BaseModel):
    """Error envelope returned by the exception handlers."""

    detail: str
    type: str
    position: int | None = None
