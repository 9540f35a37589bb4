"""Fraud Transaction Explorer Service.

This service loads a CSV of card transactions and provides APIs for browsing
them (filter, sort, paginate, summary stats) and for managing fraud
detection rules.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from txn_explorer.api.routes import api_router
from txn_explorer.api.routes.health import router as health_router
from txn_explorer.core.config import AppEnvironment, Settings, get_settings
from txn_explorer.core.errors import ServiceError, TransactionExplorerError, get_status_code
from txn_explorer.core.logging import setup_logging
from txn_explorer.domain.records import RecordStore
from txn_explorer.persistence.kv_store import KeyValueStore, create_store
from txn_explorer.persistence.rules_repository import RulesRepository
from txn_explorer.services.auth_service import AuthService
from txn_explorer.services.ingestion_service import CsvIngestionService
from txn_explorer.services.rules_service import RulesService
from txn_explorer.services.table_service import TableService

logger = logging.getLogger(__name__)

# API version prefix
API_V1_PREFIX = "/api/v1"


def init_services(app: FastAPI, settings: Settings, store: KeyValueStore | None = None) -> None:
    """Build the services and attach them to ``app.state``."""
    kv_store = store if store is not None else create_store(settings.storage)

    app.state.settings = settings
    app.state.kv_store = kv_store
    app.state.table_service = TableService(
        RecordStore(),
        settings.table,
        ingestion=CsvIngestionService(settings.data_source),
    )
    app.state.rules_service = RulesService(RulesRepository(kv_store))
    app.state.auth_service = AuthService(kv_store, settings.auth)


async def load_initial_data(app: FastAPI) -> None:
    """Load the dataset once. A failure is logged and kept for the readiness check."""
    try:
        await app.state.table_service.reload()
    except ServiceError as e:
        logger.error(
            "Initial transaction load failed",
            extra={"error": e.message, "error_code": e.code},
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context manager."""
    settings = get_settings()

    setup_logging(settings)

    logger.info(
        "Starting Fraud Transaction Explorer Service",
        extra={
            "app": settings.app.name,
            "env": settings.app.env,
            "version": settings.app.version,
            "data_source": settings.data_source.location,
        },
    )

    init_services(app, settings)

    if settings.data_source.load_on_startup:
        await load_initial_data(app)

    yield

    logger.info("Fraud Transaction Explorer Service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Transaction Explorer API",
        description=(
            "API for browsing card transactions loaded from CSV and for managing "
            "fraud detection rules."
        ),
        version=settings.app.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.app.env != AppEnvironment.PROD else None,
        redoc_url="/redoc" if settings.app.env != AppEnvironment.PROD else None,
        openapi_url="/openapi.json" if settings.app.env != AppEnvironment.PROD else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_allowed_origins,
        allow_credentials=settings.security.cors_allow_credentials,
        allow_methods=settings.security.cors_allow_methods,
        allow_headers=settings.security.cors_allow_headers,
    )

    app.include_router(health_router, prefix=API_V1_PREFIX)
    app.include_router(api_router, prefix=API_V1_PREFIX)

    @app.exception_handler(TransactionExplorerError)
    async def domain_error_handler(  # type: ignore[reportUnusedFunction]
        request: Request, exc: TransactionExplorerError
    ) -> JSONResponse:
        """Handle domain-specific errors and return appropriate HTTP responses."""
        status_code = get_status_code(exc)
        if status_code >= 500:
            logger.warning(
                "Request failed",
                extra={"path": request.url.path, "error": exc.message, "error_code": exc.code},
            )
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, **({"errors": exc.details} if exc.details else {})},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(  # type: ignore[reportUnusedFunction]
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions and return 500 error responses."""
        logger.exception(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


def run() -> None:
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "txn_explorer.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.app.env == AppEnvironment.LOCAL,
        workers=1 if settings.app.env == AppEnvironment.LOCAL else settings.server.workers,
        log_level=settings.app.log_level.value.lower(),
    )


if __name__ == "__main__":
    run()
