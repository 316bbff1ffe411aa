"""Structured filter expressions for record-store queries.

Callers build filters from field/operator/value nodes instead of string
concatenation. Values are escaped when rendered, so user-supplied input
(e.g. an email taken from a query string) cannot change the shape of the
expression. Terms combine with ``&&``, the only connective the services need.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar, Union

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


def render_value(value: Any) -> str:
    """Render a Python value as a PocketBase filter literal.

    Strings are single-quoted with embedded quotes backslash-escaped,
    matching the escaping of the official SDK's ``pb.filter()``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        value = value.strftime("%Y-%m-%d %H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    if not isinstance(value, str):
        raise TypeError(f"Unsupported filter value type: {type(value).__name__}")
    return "'" + value.replace("'", "\\'") + "'"


@dataclass(frozen=True)
class Condition:
    """Single ``field op value`` comparison."""

    field: str
    op: str
    value: Any

    OPERATORS: ClassVar[frozenset[str]] = frozenset(
        {"=", "!=", ">", ">=", "<", "<=", "~", "!~"}
    )

    def __post_init__(self) -> None:
        if not _FIELD_RE.match(self.field):
            raise ValueError(f"Invalid filter field name: {self.field!r}")
        if self.op not in self.OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")

    def render(self) -> str:
        return f"{self.field} {self.op} {render_value(self.value)}"


@dataclass(frozen=True)
class And:
    """Conjunction of conditions (rendered with ``&&``)."""

    terms: tuple[Condition, ...]

    def __init__(self, *terms: "FilterExpression") -> None:
        flat: list[Condition] = []
        for term in terms:
            if isinstance(term, And):
                flat.extend(term.terms)
            else:
                flat.append(term)
        object.__setattr__(self, "terms", tuple(flat))

    def render(self) -> str:
        return " && ".join(term.render() for term in self.terms)


FilterExpression = Union[Condition, And]


def where(**equals: Any) -> FilterExpression | None:
    """Build an equality conjunction from keyword args; None values are skipped.

    ``where(email="a@x.com", status="open")`` renders as
    ``email = 'a@x.com' && status = 'open'``. Returns None when nothing is left.
    """
    conditions = [Condition(k, "=", v) for k, v in equals.items() if v is not None]
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return And(*conditions)


def and_(
    existing: FilterExpression | None, extra: FilterExpression | None
) -> FilterExpression | None:
    """AND an extra term onto an optional existing filter (existing first)."""
    if existing is None:
        return extra
    if extra is None:
        return existing
    return And(existing, extra)


def render(expression: FilterExpression | None) -> str:
    """Render an optional expression; empty string means "no filter"."""
    return expression.render() if expression is not None else ""
