"""Health check routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from txn_explorer import __version__

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    dataset: str
    records: int = 0
    error: str | None = None


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is running.",
)
async def health_check() -> HealthResponse:
    """Return service health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness check",
    description="Report whether the transaction dataset is loaded.",
)
async def readiness_check(request: Request) -> ReadyResponse:
    """Return service readiness status."""
    table_service = request.app.state.table_service
    if table_service.store.is_loaded:
        return ReadyResponse(
            status="ready",
            dataset="empty" if table_service.store.is_empty else "loaded",
            records=len(table_service.store),
        )
    return ReadyResponse(
        status="degraded",
        dataset="not_loaded",
        error=table_service.load_error,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Kubernetes liveness probe endpoint.",
)
async def liveness_check() -> dict:
    """Return liveness status."""
    return {"status": "alive"}
