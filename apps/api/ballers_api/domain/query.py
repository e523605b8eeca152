"""Storage-neutral query predicates and sort orders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

_MISSING = object()


def resolve_path(document: dict[str, Any], path: str) -> Any:
    """Read a dotted field path (``address.city``) from a document."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


@dataclass(frozen=True, slots=True)
class Equals:
    field: str
    value: Any

    def matches(self, document: dict[str, Any]) -> bool:
        actual = resolve_path(document, self.field)
        if isinstance(actual, list):
            return self.value in actual
        return actual is not _MISSING and actual == self.value


@dataclass(frozen=True, slots=True)
class Contains:
    """Case-insensitive substring match on a string field."""

    field: str
    value: str

    def matches(self, document: dict[str, Any]) -> bool:
        actual = resolve_path(document, self.field)
        return isinstance(actual, str) and self.value.lower() in actual.lower()


@dataclass(frozen=True, slots=True)
class InRange:
    """``lower <= value`` and ``value < upper`` (``<=`` when ``upper_inclusive``)."""

    field: str
    lower: Any = None
    upper: Any = None
    upper_inclusive: bool = True

    def matches(self, document: dict[str, Any]) -> bool:
        actual = resolve_path(document, self.field)
        if actual is _MISSING or actual is None:
            return False
        try:
            if self.lower is not None and actual < self.lower:
                return False
            if self.upper is not None:
                return actual <= self.upper if self.upper_inclusive else actual < self.upper
        except TypeError:
            return False
        return True


@dataclass(frozen=True, slots=True)
class AnyOf:
    field: str
    values: tuple[Any, ...]

    def matches(self, document: dict[str, Any]) -> bool:
        actual = resolve_path(document, self.field)
        return actual is not _MISSING and actual in self.values


Condition = Equals | Contains | InRange | AnyOf


@dataclass(frozen=True, slots=True)
class Predicate:
    """Conjunction of conditions; no conditions matches every document."""

    conditions: tuple[Condition, ...] = ()

    def matches(self, document: dict[str, Any]) -> bool:
        return all(condition.matches(document) for condition in self.conditions)

    def and_(self, *others: Predicate | Condition) -> Predicate:
        conditions = list(self.conditions)
        for other in others:
            if isinstance(other, Predicate):
                conditions.extend(other.conditions)
            else:
                conditions.append(other)
        return Predicate(tuple(conditions))

    @classmethod
    def where(cls, **equals: Any) -> Predicate:
        return cls(tuple(Equals(field, value) for field, value in equals.items()))


MATCH_ALL = Predicate()


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class Sort:
    field: str
    direction: SortDirection = SortDirection.ASC


NEWEST_FIRST = Sort("created_at", SortDirection.DESC)


__all__ = [
    "AnyOf",
    "Condition",
    "Contains",
    "Equals",
    "InRange",
    "MATCH_ALL",
    "NEWEST_FIRST",
    "Predicate",
    "Sort",
    "SortDirection",
    "resolve_path",
]
