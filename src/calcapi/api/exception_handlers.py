"""
Exception handlers for the calculator API.

Maps errors to HTTP responses with a consistent JSON envelope
``{"detail": ..., "type": ...}``:

- RequestValidationError: malformed request body or query (400)
- InvalidExpressionError: lexical/syntax errors (400, with position)
- DivisionByZeroError: evaluation failure (422)
- Anything else: 500, logged with traceback
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from calcapi.core.errors import DivisionByZeroError, InvalidExpressionError

logger = logging.getLogger(__name__)


def _sanitize_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    # ctx may hold raw exception instances, which are not JSON serializable
    errors: list[dict[str, Any]] = []
    for err in exc.errors():
        clean: dict[str, Any] = {}
        for k, v in err.items():
            if k == "ctx" and isinstance(v, dict):
                clean[k] = {ck: str(cv) for ck, cv in v.items()}
            elif k == "input":
                continue
            else:
                clean[k] = v
        errors.append(clean)
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the calculator's exception handlers on a FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        """Convert request validation errors to 400 Bad Request with field details."""
        return JSONResponse(
            status_code=400,
            content={
                "detail": "Validation error",
                "type": "validation_error",
                "errors": _sanitize_errors(exc),
            },
        )

    @app.exception_handler(InvalidExpressionError)
    async def invalid_expression_handler(
        request: Request, exc: InvalidExpressionError
    ) -> Response:
        """Convert tokenize/parse failures to 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "detail": exc.message,
                "type": "invalid_expression",
                "position": exc.position,
            },
        )

    @app.exception_handler(DivisionByZeroError)
    async def division_by_zero_handler(request: Request, exc: DivisionByZeroError) -> Response:
        """Convert division by zero to 422 Unprocessable Entity."""
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "type": "division_by_zero"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
        """Catch-all: log and return 500 without leaking internals."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "type": "internal_error"},
        )
