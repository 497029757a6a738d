"""
sog_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/api/healthcheck`).
- Provide readiness probe (`/readyz`) with MongoDB connectivity validation.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from sog_api.api.deps import database_dep
from sog_api.db.client import ping
from sog_api.observability.logging import get_logger
from sog_api.schemas.common import GenericResponse

router = APIRouter()

log = get_logger(__name__)


@router.get("/api/healthcheck", response_model=GenericResponse)
async def healthcheck() -> GenericResponse:
    return GenericResponse(status="success", message="SOG API is up and running")


@router.get("/readyz", response_model=None)
async def readyz(
    database: AsyncDatabase[dict[str, Any]] = Depends(database_dep),
) -> dict[str, str] | JSONResponse:
    try:
        await ping(database)
    except PyMongoError as exc:
        log.warning("readiness_failed", error=str(exc))
        # Same envelope as `sog_api.api.errors`.
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "error",
                "code": "DATABASE_UNAVAILABLE",
                "message": "Database unavailable",
            },
        )
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses the healthcheck for liveness and /readyz for readiness gating.
