"""Permission API schemas.

Permission records carry an owner email plus free-form permission flags,
so extra fields are passed through to the record store.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EMAIL_PATTERN


class PermissionCreate(BaseModel):
    """Request body for creating a permission."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)


class PermissionUpdate(BaseModel):
    """Request body for updating a permission."""

    model_config = ConfigDict(extra="allow")

    email: str | None = Field(default=None, max_length=254, pattern=EMAIL_PATTERN)
