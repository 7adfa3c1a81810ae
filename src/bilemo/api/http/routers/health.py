"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.bilemo.api.http.app_data import ApplicationDependencies
from src.bilemo.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "bilemo"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check of the database and the cache backend.

    Returns 200 when the database answers, 503 otherwise. A cache failure
    is reported but not fatal.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, Any] = {}

    db_healthy = app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.is_sqlite else "postgresql",
    }

    cache_healthy = await app_deps.tag_cache.ping()
    checks["cache"] = {
        "status": "healthy" if cache_healthy else "degraded",
        "type": app_deps.tag_cache.backend,
    }

    body = {"status": "ready" if db_healthy else "not ready", "checks": checks}
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
