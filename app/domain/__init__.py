"""Domain layer: value objects and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    RecordConflictError,
    RecordNotFoundError,
    RecordRetrievalError,
    TaskTrackException,
    ValidationException,
)
from app.domain.value_objects import And, Condition, FilterExpression, where

__all__ = [
    # Exceptions
    "RecordConflictError",
    "RecordNotFoundError",
    "RecordRetrievalError",
    "TaskTrackException",
    "ValidationException",
    # Value objects
    "And",
    "Condition",
    "FilterExpression",
    "where",
]
