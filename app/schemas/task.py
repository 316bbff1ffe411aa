"""Task API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EMAIL_PATTERN


class TaskCreate(BaseModel):
    """Request body for creating a task."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    description: str | None = Field(default=None, max_length=5000)
    progress: float | None = Field(default=None, ge=0, le=100)
    deadline: str | None = None
    is_done: bool | None = None
    completed_at: str | None = None
    status: str | None = Field(default=None, max_length=64)


class TaskUpdate(BaseModel):
    """Request body for updating a task; only fields that are sent are changed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=254, pattern=EMAIL_PATTERN)
    description: str | None = Field(default=None, max_length=5000)
    progress: float | None = Field(default=None, ge=0, le=100)
    deadline: str | None = None
    is_done: bool | None = None
    completed_at: str | None = None
    status: str | None = Field(default=None, max_length=64)
