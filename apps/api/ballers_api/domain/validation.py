"""Payload validation against declarative schemas.

Schemas are pydantic models whose fields carry a human readable label in
``Field(title=...)``. :func:`validate_payload` is the one interpreter for all
of them: it normalizes the payload (defaults, coercion, unknown keys dropped)
or reports the first violation, in field declaration order, phrased against
the violated field's label.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Generic, Literal, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, EmailStr, ValidationError
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo
from pydantic_core import ErrorDetails

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

_NOT_AN_OBJECT = '"value" must be of type object'

_NUMBER = "must be a number"
_DATE = "must be a valid date"
_OBJECT = "must be of type object"
_BOOLEAN = "must be a boolean"

_TEMPLATES: dict[str, str] = {
    "missing": "is required",
    "string_type": "must be a string",
    "int_type": _NUMBER,
    "int_parsing": _NUMBER,
    "int_from_float": "must be an integer",
    "float_type": _NUMBER,
    "float_parsing": _NUMBER,
    "finite_number": _NUMBER,
    "bool_type": _BOOLEAN,
    "bool_parsing": _BOOLEAN,
    "date_type": _DATE,
    "date_parsing": _DATE,
    "date_from_datetime_parsing": _DATE,
    "date_from_datetime_inexact": _DATE,
    "datetime_type": _DATE,
    "datetime_parsing": _DATE,
    "datetime_from_date_parsing": _DATE,
    "list_type": "must be an array",
    "model_type": _OBJECT,
    "model_attributes_type": _OBJECT,
    "dict_type": _OBJECT,
    "string_too_short": "length must be at least {min_length} characters long",
    "string_too_long": "length must be less than or equal to {max_length} characters long",
    "string_pattern_mismatch": "fails to match the required pattern",
    "greater_than": "must be greater than {gt}",
    "greater_than_equal": "must be greater than or equal to {ge}",
    "less_than": "must be less than {lt}",
    "less_than_equal": "must be less than or equal to {le}",
    "too_short": "must contain at least {min_length} items",
    "too_long": "must contain less than or equal to {max_length} items",
    "invalid_identifier": "must be a valid id",
    "date_not_in_future": "should be a date later than {date}",
}


@dataclass(frozen=True, slots=True)
class ValidationResult(Generic[T]):
    """Either a normalized value or a single error message, never both."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_payload(schema: type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    if not isinstance(payload, Mapping):
        return ValidationResult(error=_NOT_AN_OBJECT)

    try:
        value = schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(error=describe_error(schema, exc.errors()[0]))
    return ValidationResult(value=value)


def describe_error(schema: type[BaseModel], error: ErrorDetails) -> str:
    """Phrase one pydantic error the way clients of this API expect."""
    label, field = _resolve_field(schema, error["loc"])
    return _phrase(label, field, error)


def describe_parameter_error(error: ErrorDetails) -> str:
    """Phrase a query or path parameter error against the parameter name."""
    names = [part for part in error["loc"] if isinstance(part, str)]
    return _phrase(names[-1] if len(names) > 1 else "value", None, error)


def _phrase(label: str, field: FieldInfo | None, error: ErrorDetails) -> str:
    error_type = error["type"]
    if error_type == "string_too_short" and error.get("input") == "":
        return f'"{label}" is not allowed to be empty'
    if error_type in {"literal_error", "enum"}:
        allowed = _allowed_values(field.annotation) if field is not None else []
        if allowed:
            return f'"{label}" must be one of [{", ".join(allowed)}]'
        return f'"{label}" must be one of [{error.get("ctx", {}).get("expected", "")}]'
    if error_type == "value_error" and field is not None and _is_email(field.annotation):
        return f'"{label}" must be a valid email'

    template = _TEMPLATES.get(error_type)
    if template is None:
        # Custom validators word their own message.
        return error["msg"]
    return f'"{label}" {template.format(**error.get("ctx", {}))}'


def _resolve_field(schema: type[BaseModel], loc: tuple[int | str, ...]) -> tuple[str, FieldInfo | None]:
    model: type[BaseModel] | None = schema
    label = "value"
    field: FieldInfo | None = None
    for part in loc:
        if isinstance(part, int):
            continue
        if model is None:
            break
        name, field = _lookup(model, part)
        if field is None:
            label = part
            break
        label = field.title or name
        model = _nested_model(field.annotation)
    return label, field


def _lookup(model: type[BaseModel], key: str) -> tuple[str, FieldInfo | None]:
    for name, field in model.model_fields.items():
        if key in {name, field.alias, to_camel(name)}:
            return name, field
    return key, None


def _unwrap(annotation: Any) -> list[Any]:
    origin = get_origin(annotation)
    if origin in {Union, UnionType}:
        return [arg for member in get_args(annotation) if member is not NoneType for arg in _unwrap(member)]
    if origin is list:
        return _unwrap(get_args(annotation)[0])
    return [annotation]


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    for candidate in _unwrap(annotation):
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


def _allowed_values(annotation: Any) -> list[str]:
    values: list[str] = []
    for candidate in _unwrap(annotation):
        if get_origin(candidate) is Literal:
            values.extend(str(arg.value if isinstance(arg, Enum) else arg) for arg in get_args(candidate))
        elif isinstance(candidate, type) and issubclass(candidate, Enum):
            values.extend(str(member.value) for member in candidate)
    return values


def _is_email(annotation: Any) -> bool:
    return any(candidate is EmailStr for candidate in _unwrap(annotation))


__all__ = ["ValidationResult", "describe_error", "describe_parameter_error", "validate_payload"]
