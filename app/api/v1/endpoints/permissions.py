"""Permissions API: latest permission per email, get by id, create/update/delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_bypass, get_permission_service
from app.api.v1.responses import envelope_response
from app.application.services.permission_service import PermissionService
from app.core.limiter import limit_writes
from app.schemas.common import EMAIL_PATTERN, RECORD_ID_PATTERN
from app.schemas.envelope import EnvelopeResponse
from app.schemas.permission import PermissionCreate, PermissionUpdate

router = APIRouter()

PermissionId = Annotated[str, Path(pattern=RECORD_ID_PATTERN)]


@router.get("", response_model=EnvelopeResponse)
async def get_latest_permission(
    email: Annotated[str, Query(max_length=254, pattern=EMAIL_PATTERN)],
    bypass: Annotated[bool, Depends(get_bypass)],
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> JSONResponse:
    """Most recent permission for email; data is null when there is none."""
    return envelope_response(await service.get_latest_permission(email, bypass))


@router.get("/{permission_id}", response_model=EnvelopeResponse)
async def get_permission(
    permission_id: PermissionId,
    bypass: Annotated[bool, Depends(get_bypass)],
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> JSONResponse:
    """Permission by id, cached under permission:<id>."""
    return envelope_response(await service.get(permission_id, bypass))


@router.post("", status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreate,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> dict[str, Any]:
    """Create a permission; evicts the owner's permission list caches."""
    return await service.create(body.model_dump(exclude_none=True))


@router.put("/{permission_id}")
@limit_writes
async def update_permission(
    request: Request,
    permission_id: PermissionId,
    body: PermissionUpdate,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> dict[str, Any]:
    """Update a permission; evicts list caches for the old and new owner."""
    return await service.update(permission_id, body.model_dump(exclude_unset=True))


@router.delete("/{permission_id}", response_model=EnvelopeResponse)
@limit_writes
async def delete_permission(
    request: Request,
    permission_id: PermissionId,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> JSONResponse:
    """Delete a permission; evicts the owner's permission list caches."""
    return envelope_response(await service.delete(permission_id))
