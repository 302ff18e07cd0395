"""Health Probe — reports PostgreSQL and Valkey reachability independently.

Invariants:
    - GET /health returns 200 with status "ok" when every configured dependency answers
    - Any failing dependency marks it "error" and degrades the status to 503
    - Dependencies that were never initialized are omitted from the report
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.infrastructure import cache, database
from app.schemas.health import DependencyHealth, HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check():
    checks = DependencyHealth()
    healthy = True

    if database.db_manager is not None:
        ok = await database.db_manager.health_check()
        checks.postgres = "ok" if ok else "error"
        healthy = healthy and ok

    if cache.cache_manager is not None:
        ok = await cache.cache_manager.health_check()
        checks.valkey = "ok" if ok else "error"
        healthy = healthy and ok

    body = HealthResponse(
        status="ok" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        database=checks,
    )
    if not healthy:
        logger.warning(f"Health check degraded: {checks.model_dump()}")
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content=body.model_dump(exclude_none=True),
    )
