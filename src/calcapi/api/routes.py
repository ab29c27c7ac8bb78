"""
Calculator API routes.

These routes provide:
- Expression evaluation with history recording (POST /calculator)
- History paging (GET /calculator)
- Liveness check (GET /health)
"""

from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from calcapi.api.schemas import CalculateRequest, ErrorResponse
from calcapi.history.models import HistoryItem, HistoryPage
from calcapi.service import CalculatorService

HEALTH_MESSAGE = "Service is up and running"


def create_health_routes() -> APIRouter:
    """Create the liveness endpoint."""
    router = APIRouter(tags=["Health"])

    @router.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return HEALTH_MESSAGE

    return router


def create_calculator_routes(service: CalculatorService) -> APIRouter:
    """Create calculator routes bound to ``service``.

    Args:
        service: Calculator service used by all handlers.

    Returns:
        FastAPI APIRouter mounted at ``/calculator``.
    """
    router = APIRouter(prefix="/calculator", tags=["Calculator"])

    @router.post(
        "",
        response_model=HistoryItem,
        responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    )
    def calculate(request: CalculateRequest) -> HistoryItem:
        """
        Evaluate an expression and record it in history.

        - **expression**: e.g. ``(10 + 2) * 3 - 4 / 2``
        """
        return service.calculate_and_store(request.expression)

    @router.get("", response_model=HistoryPage)
    def get_history(
        take: int = Query(20, ge=1, le=1000, description="Max items to return"),
        skip: int = Query(0, ge=0, description="Items to skip"),
    ) -> HistoryPage:
        """List recorded calculations in insertion order."""
        return service.get_history(take=take, skip=skip)

    return router
