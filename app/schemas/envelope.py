"""Response envelope API schema (documentation of the wire shape)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EnvelopeResponse(BaseModel):
    """Uniform read/delete response with cache provenance.

    Pagination fields are present only on paginated list results.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int = Field(..., description="HTTP-style status of the operation")
    message: str
    data: Any = None
    source: str = Field(
        ..., description='"cache", "database" or "database (cache bypassed)"'
    )
    cache_key: str | None = Field(default=None, description="Cache key the result lives under")
    page: int | None = None
    per_page: int | None = None
    total_pages: int | None = None
    total_items: int | None = None
