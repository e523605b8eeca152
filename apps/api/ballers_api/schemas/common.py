"""Shared API schema building blocks."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ballers_api.domain.identifiers import is_valid_identifier

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for request and response bodies; camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_identifier(value: str) -> str:
    if not is_valid_identifier(value):
        raise PydanticCustomError("invalid_identifier", "value is not a valid id")
    return value


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _check_future_date(value: date) -> date:
    today = datetime.now(UTC).date()
    if value <= today:
        raise PydanticCustomError(
            "date_not_in_future",
            "value should be a date later than {date}",
            {"date": today.strftime("%a, %d %b %Y")},
        )
    return value


ObjectIdStr = Annotated[str, AfterValidator(_check_identifier)]
UtcDatetime = Annotated[datetime, AfterValidator(_ensure_utc)]
FutureDate = Annotated[date, AfterValidator(_check_future_date)]


class Address(ApiModel):
    street1: str = Field(min_length=1, title="Street 1")
    street2: str | None = Field(default=None, title="Street 2")
    city: str = Field(min_length=1, title="City")
    state: str = Field(min_length=1, title="State")
    country: str = Field(default="Nigeria", min_length=1, title="Country")


class PaginationResult(ApiModel):
    current_page: int
    limit: int
    offset: int
    total: int
    total_page: int


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class ListResponse(ApiModel, Generic[T]):
    success: bool = True
    result: list[T]
    pagination: PaginationResult


class CollectionResponse(ApiModel, Generic[T]):
    """Unpaginated collection; empty collections are still a 200."""

    success: bool = True
    result: list[T]
