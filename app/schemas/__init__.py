"""API request/response schemas (pydantic)."""

from app.schemas.envelope import EnvelopeResponse
from app.schemas.health import HealthResponse, ReadinessResponse, RootResponse
from app.schemas.permission import PermissionCreate, PermissionUpdate
from app.schemas.task import TaskCreate, TaskUpdate

__all__ = [
    "EnvelopeResponse",
    "HealthResponse",
    "PermissionCreate",
    "PermissionUpdate",
    "ReadinessResponse",
    "RootResponse",
    "TaskCreate",
    "TaskUpdate",
]
