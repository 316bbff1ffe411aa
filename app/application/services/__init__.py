"""Application services: cache-aside reads, invalidation, per-resource CRUD."""

from app.application.services.cache_aside import CacheAsideQueryService
from app.application.services.health import check_health
from app.application.services.invalidation import EvictionResult, InvalidationCoordinator
from app.application.services.permission_service import PERMISSION_RESOURCE, PermissionService
from app.application.services.record_service import RecordService
from app.application.services.task_service import TASK_RESOURCE, TaskService

__all__ = [
    "CacheAsideQueryService",
    "EvictionResult",
    "InvalidationCoordinator",
    "PERMISSION_RESOURCE",
    "PermissionService",
    "RecordService",
    "TASK_RESOURCE",
    "TaskService",
    "check_health",
]
