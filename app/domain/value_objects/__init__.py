"""Domain value objects and shared value types."""

from app.domain.value_objects.filters import (
    And,
    Condition,
    FilterExpression,
    and_,
    render,
    where,
)

__all__ = [
    "And",
    "Condition",
    "FilterExpression",
    "and_",
    "render",
    "where",
]
