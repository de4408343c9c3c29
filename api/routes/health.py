"""
Health and readiness endpoints for load balancers and Kubernetes.
Public under the auth gate; keep payloads minimal for fast checks.
"""

from fastapi import APIRouter, Response
from pydantic import BaseModel

from core.dependencies import DatabaseConnectionDep, DatabaseDep, SettingsDep

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Minimal health payload for probes."""

    status: str = "ok"
    service: str = "imaginify"


class ReadinessResponse(BaseModel):
    """Readiness: dependency states, without forcing connections."""

    ready: bool = True
    checks: dict[str, str] = {}

    model_config = {"extra": "forbid"}


class DatabaseHealthResponse(BaseModel):
    status: str = "ok"
    database: str


@router.get("", response_model=HealthResponse)
async def health(settings: SettingsDep) -> HealthResponse:
    """
    Liveness: is the process alive.
    Used by Kubernetes livenessProbe, Docker HEALTHCHECK.
    """
    return HealthResponse(service=settings.APP_NAME)


@router.get("/ready", response_model=ReadinessResponse)
async def ready(settings: SettingsDep, connection: DatabaseConnectionDep) -> ReadinessResponse:
    """
    Readiness: config loaded and state of the cached database handle.
    Reports only; the handle is connected on first real use.
    """
    checks: dict[str, str] = {"config": "loaded"}
    if not settings.MONGODB_URL:
        checks["database"] = "unconfigured"
    else:
        checks["database"] = "connected" if connection.is_connected else "idle"
    return ReadinessResponse(ready=True, checks=checks)


@router.get("/database", response_model=DatabaseHealthResponse)
async def database(db: DatabaseDep, connection: DatabaseConnectionDep) -> DatabaseHealthResponse:
    """Connects if needed; a failing ping surfaces as an error response."""
    return DatabaseHealthResponse(database=connection.db_name)


@router.get("/live")
async def live(response: Response) -> None:
    """
    Minimal live check: 200 with no body. For Nginx/Cloudflare health checks.
    """
    response.status_code = 200
