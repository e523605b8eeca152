"""Paginated listing: query-string parsing, filter maps and page metadata."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
import logging
import math
from typing import Any, Generic, TypeVar

from ballers_api.domain.query import (
    NEWEST_FIRST,
    Contains,
    Equals,
    InRange,
    Predicate,
    Sort,
    SortDirection,
)
from ballers_api.domain.validation import ValidationResult
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.base import Collection
from ballers_api.schemas.common import PaginationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
SORT_BY_PARAM = "sortBy"
SORT_DIRECTION_PARAM = "sortDirection"


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def parse_page_request(query: Mapping[str, str], *, default_limit: int = DEFAULT_LIMIT) -> PageRequest:
    """Invalid or missing ``page``/``limit`` fall back to the defaults."""
    return PageRequest(
        page=_positive_int(query.get("page"), DEFAULT_PAGE),
        limit=_positive_int(query.get("limit"), default_limit),
    )


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def build_pagination(request: PageRequest, total: int) -> PaginationResult:
    return PaginationResult(
        current_page=request.page,
        limit=request.limit,
        offset=request.offset,
        total=total,
        total_page=total_pages(total, request.limit),
    )


class FilterKind(str, Enum):
    EXACT = "exact"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    CONTAINS = "contains"
    DATE = "date"
    MIN = "min"
    MAX = "max"


@dataclass(frozen=True, slots=True)
class FilterField:
    """Maps an accepted query parameter onto the document field it constrains."""

    param: str
    field: str
    kind: FilterKind = FilterKind.EXACT
    sortable: bool = False


FilterMap = tuple[FilterField, ...]


def _parse_number(raw: str) -> float | int:
    try:
        return int(raw)
    except ValueError:
        value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number {raw!r}")
    return value


def _parse_day(raw: str) -> date:
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return date.fromisoformat(raw[:10])


def _condition(spec: FilterField, raw: str) -> Equals | Contains | InRange:
    if spec.kind is FilterKind.BOOLEAN:
        return Equals(spec.field, raw.lower() == "true")
    if spec.kind is FilterKind.INTEGER:
        return Equals(spec.field, int(raw))
    if spec.kind is FilterKind.CONTAINS:
        return Contains(spec.field, raw)
    if spec.kind is FilterKind.DATE:
        start = datetime.combine(_parse_day(raw), time.min, tzinfo=UTC)
        return InRange(spec.field, lower=start, upper=start + timedelta(days=1), upper_inclusive=False)
    if spec.kind is FilterKind.MIN:
        return InRange(spec.field, lower=_parse_number(raw))
    if spec.kind is FilterKind.MAX:
        return InRange(spec.field, upper=_parse_number(raw))
    return Equals(spec.field, raw)


def build_predicate(filter_map: FilterMap, query: Mapping[str, str]) -> ValidationResult[Predicate]:
    """Turn the declared filters present in ``query`` into one predicate.

    Parameters missing from ``filter_map`` are ignored. No declared filter in
    the query yields the match-everything predicate.
    """
    conditions = []
    for spec in filter_map:
        raw = query.get(spec.param)
        if raw is None or raw == "":
            continue
        try:
            conditions.append(_condition(spec, raw))
        except ValueError:
            expected = "a valid date" if spec.kind is FilterKind.DATE else "a number"
            return ValidationResult(error=f'"{spec.param}" must be {expected}')
    return ValidationResult(value=Predicate(tuple(conditions)))


def parse_sort(filter_map: FilterMap, query: Mapping[str, str], default: Sort) -> Sort:
    sort_by = query.get(SORT_BY_PARAM)
    for spec in filter_map:
        if spec.sortable and sort_by in (spec.param, spec.field):
            direction = query.get(SORT_DIRECTION_PARAM, "").lower()
            return Sort(spec.field, SortDirection.DESC if direction == "desc" else SortDirection.ASC)
    return default


@dataclass(slots=True)
class Page(Generic[T]):
    result: list[T]
    pagination: PaginationResult

    def map(self, convert: Callable[[T], U]) -> Page[U]:
        return Page(result=[convert(item) for item in self.result], pagination=self.pagination)


def paginate(
    query: Mapping[str, str],
    collection: Collection,
    filter_map: FilterMap = (),
    *,
    base: Predicate | None = None,
    default_sort: Sort = NEWEST_FIRST,
    default_limit: int = DEFAULT_LIMIT,
) -> Page[dict[str, Any]]:
    """Fetch one page of ``collection`` constrained by ``base`` and the query's filters.

    Collection failures are not caught here.
    """
    page_request = parse_page_request(query, default_limit=default_limit)
    filtered = build_predicate(filter_map, query)
    if not filtered.ok:
        raise ApiError(ErrorKind.VALIDATION_ERROR, filtered.error)

    predicate = filtered.value if base is None else base.and_(filtered.value)
    sort = parse_sort(filter_map, query, default_sort)
    total = collection.count(predicate)
    result = collection.find(predicate, skip=page_request.offset, limit=page_request.limit, sort=(sort,))
    logger.debug(
        "pagination.page collection=%s page=%s limit=%s total=%s",
        collection.name,
        page_request.page,
        page_request.limit,
        total,
    )
    return Page(result=result, pagination=build_pagination(page_request, total))


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "FilterField",
    "FilterKind",
    "FilterMap",
    "Page",
    "PageRequest",
    "build_pagination",
    "build_predicate",
    "paginate",
    "parse_page_request",
    "parse_sort",
    "total_pages",
]
