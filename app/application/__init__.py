"""Application layer: interfaces, DTOs, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record store, cache).
"""

from app.application.interfaces import IRecordStore
from app.application.services import (
    CacheAsideQueryService,
    InvalidationCoordinator,
    PermissionService,
    RecordService,
    TaskService,
)

__all__ = [
    "CacheAsideQueryService",
    "IRecordStore",
    "InvalidationCoordinator",
    "PermissionService",
    "RecordService",
    "TaskService",
]
