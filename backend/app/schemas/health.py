"""Health Schemas — response body of GET /health."""

from typing import Literal

from pydantic import BaseModel

CheckStatus = Literal["ok", "error"]


class DependencyHealth(BaseModel):
    postgres: CheckStatus | None = None
    valkey: CheckStatus | None = None


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    timestamp: str
    database: DependencyHealth
