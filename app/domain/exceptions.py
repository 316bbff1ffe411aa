"""Domain exceptions for the Task Track application.

Defines the errors the services surface to callers. They are independent
of infrastructure concerns; the presentation layer maps them to HTTP
responses in exception handlers.
"""

from typing import Any


class TaskTrackException(Exception):
    """Base exception for all Task Track application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. collection, record_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskTrackException):
    """Raised when input validation fails (e.g. invalid filter field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class RecordNotFoundError(TaskTrackException):
    """Raised when the record store has no entity for an id or filter lookup.

    The id-lookup path also raises this for backend failures; callers cannot
    tell "absent" from "record store down" there.
    """

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        record_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if collection:
            details["collection"] = collection
        if record_id:
            details["record_id"] = record_id
        super().__init__(message, "RECORD_NOT_FOUND", details)


class RecordConflictError(TaskTrackException):
    """Raised when a create violates a record-store constraint (e.g. duplicate)."""

    def __init__(self, message: str, collection: str | None = None) -> None:
        details = {"collection": collection} if collection else {}
        super().__init__(message, "RECORD_CONFLICT", details)


class RecordRetrievalError(TaskTrackException):
    """Raised when a list read against the record store fails. Safe to retry."""

    def __init__(self, collection: str) -> None:
        super().__init__(
            f"Failed to retrieve {collection}. Please try again.",
            "RECORD_RETRIEVAL_FAILED",
            {"collection": collection},
        )
