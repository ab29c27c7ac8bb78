"""
Application factory - wires configuration, repository, service, and routes.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from calcapi._version import get_version
from calcapi.api.exception_handlers import register_exception_handlers
from calcapi.api.routes import create_calculator_routes, create_health_routes
from calcapi.config import ServerConfig
from calcapi.history.repository import HistoryRepository, create_repository
from calcapi.service import CalculatorService

logger = logging.getLogger(__name__)


def create_app(
    repository: HistoryRepository | None = None,
    config: ServerConfig | None = None,
) -> FastAPI:
    """
    Create the calculator FastAPI application.

    Args:
        repository: History store; built from ``config`` when omitted
        config: Server configuration; read from the environment when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or ServerConfig.from_env()
    if repository is None:
        repository = create_repository(config)

    service = CalculatorService(
        repository,
        max_expression_length=config.max_expression_length,
        max_nesting_depth=config.max_nesting_depth,
    )

    app = FastAPI(
        title="Calculator API",
        version=get_version(),
        docs_url="/docs" if config.docs_enabled else None,
        redoc_url="/redoc" if config.docs_enabled else None,
        openapi_url="/openapi.json" if config.docs_enabled else None,
    )
    app.state.config = config
    app.state.service = service

    register_exception_handlers(app)
    app.include_router(create_health_routes())
    app.include_router(create_calculator_routes(service))

    logger.debug(
        "Created app (env=%s, history=%s)",
        config.env.value,
        type(repository).__name__,
    )
    return app
