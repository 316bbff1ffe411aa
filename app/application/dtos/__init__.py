"""Application DTOs (no dependency on ORM or HTTP)."""

from app.application.dtos.envelope import ResponseEnvelope, build_envelope, found_message
from app.application.dtos.record import ListQuery, Record, RecordPage, Resource

__all__ = [
    "ListQuery",
    "Record",
    "RecordPage",
    "Resource",
    "ResponseEnvelope",
    "build_envelope",
    "found_message",
]
