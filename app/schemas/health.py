"""Health check API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class RootResponse(BaseModel):
    """Response for GET / (server banner)."""

    status: str = "ok"
    timestamp: str
    message: str = "Server is running"
    version: str


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready: record store and cache status."""

    timestamp: str
    database: dict[str, Any]
    cache: dict[str, Any]
    overall: str = Field(..., description='"healthy" or "unhealthy"')
