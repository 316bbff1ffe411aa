"""Tasks API: cached list and by-id reads, first-match lookup, create/update/delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_bypass, get_list_query, get_task_service
from app.api.v1.responses import envelope_response
from app.application.dtos.record import ListQuery
from app.application.services.task_service import TaskService
from app.core.limiter import limit_writes
from app.domain.exceptions import ValidationException
from app.domain.value_objects.filters import where
from app.schemas.common import EMAIL_PATTERN, EXPAND_PATTERN, RECORD_ID_PATTERN
from app.schemas.envelope import EnvelopeResponse
from app.schemas.task import TaskCreate, TaskUpdate

router = APIRouter()

EmailQuery = Annotated[str | None, Query(max_length=254, pattern=EMAIL_PATTERN)]
TaskId = Annotated[str, Path(pattern=RECORD_ID_PATTERN)]


@router.get("", response_model=EnvelopeResponse)
async def list_tasks(
    query: Annotated[ListQuery, Depends(get_list_query)],
    bypass: Annotated[bool, Depends(get_bypass)],
    service: Annotated[TaskService, Depends(get_task_service)],
    email: EmailQuery = None,
) -> JSONResponse:
    """One page of tasks for email (or all tasks). Cached under task_list:<email|all>."""
    return envelope_response(await service.list(email, query, bypass))


@router.get("/all", response_model=EnvelopeResponse)
async def list_all_tasks(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[TaskService, Depends(get_task_service)],
    email: EmailQuery = None,
    status: Annotated[str | None, Query(max_length=64)] = None,
) -> JSONResponse:
    """Every task for email (or all tasks), unpaginated. Always read fresh."""
    return envelope_response(await service.list_all(email, query.with_filter(where(status=status))))


@router.get("/first")
async def first_task(
    service: Annotated[TaskService, Depends(get_task_service)],
    email: EmailQuery = None,
    title: Annotated[str | None, Query(max_length=255)] = None,
    status: Annotated[str | None, Query(max_length=64)] = None,
    expand: Annotated[str | None, Query(max_length=200, pattern=EXPAND_PATTERN)] = None,
) -> dict[str, Any]:
    """First task matching all given fields. 404 when none match."""
    expr = where(email=email, title=title, status=status)
    if expr is None:
        raise ValidationException("At least one of email, title or status is required")
    return await service.first(expr, expand or "")


@router.get("/{task_id}", response_model=EnvelopeResponse)
async def get_task(
    task_id: TaskId,
    bypass: Annotated[bool, Depends(get_bypass)],
    service: Annotated[TaskService, Depends(get_task_service)],
) -> JSONResponse:
    """Task by id, cached under task:<id>."""
    return envelope_response(await service.get(task_id, bypass))


@router.post("", status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreate,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> dict[str, Any]:
    """Create a task; evicts the owner's list caches."""
    return await service.create(body.model_dump(exclude_none=True))


@router.put("/{task_id}")
@limit_writes
async def update_task(
    request: Request,
    task_id: TaskId,
    body: TaskUpdate,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> dict[str, Any]:
    """Update the fields sent in the body; evicts list caches for the old and new owner."""
    return await service.update(task_id, body.model_dump(exclude_unset=True))


@router.delete("/{task_id}", response_model=EnvelopeResponse)
@limit_writes
async def delete_task(
    request: Request,
    task_id: TaskId,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> JSONResponse:
    """Delete a task; evicts the owner's list caches."""
    return envelope_response(await service.delete(task_id))
