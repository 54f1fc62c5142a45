# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# These are public and bypass the success envelope.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from app.dependencies import get_database
from lib.database import Database

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Liveness endpoint.

    Returns basic health status without touching the database.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=request.app.state.settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(database: Database = Depends(get_database)):
    """
    Readiness endpoint.

    Pings the database; answers 503 while it is unreachable.
    """
    healthy = await run_in_threadpool(database.is_healthy)
    response = ReadinessResponse(
        status="ready" if healthy else "degraded",
        checks=ChecksResponse(database="healthy" if healthy else "unhealthy"),
        timestamp=_now(),
    )
    if not healthy:
        return JSONResponse(status_code=503, content=response.model_dump())
    return response
