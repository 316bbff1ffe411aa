"""Health check endpoints: liveness and combined record-store/cache readiness."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_cache, get_record_store
from app.application.interfaces.record_store import IRecordStore
from app.application.services.health import check_health
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Record store or cache unhealthy", "model": ReadinessResponse}},
)
async def readiness_check(
    record_store: Annotated[IRecordStore, Depends(get_record_store)],
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> JSONResponse:
    """Return 200 when the record store and cache are healthy; 503 otherwise.

    A disabled cache counts as healthy.
    """
    report = await check_health(record_store, cache)
    status_code = 200 if report["overall"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=report)
