"""Ordered request pipeline attached to routes as FastAPI dependencies.

A route declares its checks with :class:`Pipeline`::

    Pipeline().require_token().require_role(Role.ADMIN).check_identifier().validate_body(AddBadgeRequest)

FastAPI resolves route-level dependencies in declaration order before the
endpoint's own parameters, so the steps run token, role guard, path
identifier, body, and the first failing step becomes the response. The builder
refuses any other order when the route module is imported.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import IntEnum
from json import JSONDecodeError
import logging
from typing import Annotated, Any

from fastapi import Depends, Request, Security
from fastapi.params import Depends as DependsParam
from fastapi.security import APIKeyHeader
from pydantic import BaseModel

from ballers_api.adapters.auth import InvalidTokenError
from ballers_api.core.context import AppContext
from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.guards import Deny, Guard, check_all, has_any_role, is_unverified_vendor_allowed, is_verified_vendor
from ballers_api.domain.identifiers import is_valid_identifier
from ballers_api.domain.validation import validate_payload
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.routes.dependencies import get_context, get_request_correlation_id
from ballers_api.schemas.auth import Principal, Role
from ballers_api.services.users import UserService

token_scheme = APIKeyHeader(name="Authorization", auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


class PipelineOrderError(RuntimeError):
    """Raised when pipeline steps are declared out of order."""


class Stage(IntEnum):
    TOKEN = 1
    ROLE = 2
    IDENTIFIER = 3
    BODY = 4


def _reject(request: Request, stage: Stage, kind: ErrorKind, message: str | None = None) -> ApiError:
    logger.warning(
        "pipeline.rejected correlation_id=%s method=%s path=%s stage=%s reason=%s",
        safe_log_identifier(get_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        stage.name.lower(),
        kind.value.lower(),
    )
    return ApiError(kind, message)


def _extract_token(header: str | None) -> str | None:
    if header is None:
        return None
    token = header.strip()
    if token.lower().startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):].strip()
    return token or None


async def authenticate(
    request: Request,
    authorization: Annotated[str | None, Security(token_scheme)],
    context: Annotated[AppContext, Depends(get_context)],
) -> Principal:
    """Resolve the bearer token to a principal and keep it on ``request.state``."""
    token = _extract_token(authorization)
    if token is None:
        raise _reject(request, Stage.TOKEN, ErrorKind.MISSING_TOKEN)

    try:
        user_id = context.tokens.verify(token)
    except InvalidTokenError as exc:
        raise _reject(request, Stage.TOKEN, ErrorKind.INVALID_TOKEN) from exc

    principal = UserService(context).find_principal_by_id(user_id)
    if principal is None:
        raise _reject(request, Stage.TOKEN, ErrorKind.INVALID_TOKEN)

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_log_identifier(get_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        safe_log_identifier(principal.id, prefix="pid"),
        principal.role.value,
    )
    request.state.principal = principal
    return principal


def _guard_step(guards: tuple[Guard, ...]) -> Callable[[Request], None]:
    def run_guards(request: Request) -> None:
        result = check_all(guards, getattr(request.state, "principal", None))
        if isinstance(result, Deny):
            raise _reject(request, Stage.ROLE, result.kind, result.reason)

    return run_guards


def _identifier_step(param: str) -> Callable[[Request], None]:
    def check_identifier(request: Request) -> None:
        if not is_valid_identifier(request.path_params.get(param)):
            raise _reject(request, Stage.IDENTIFIER, ErrorKind.MALFORMED_IDENTIFIER)

    return check_identifier


def _body_step(schema: type[BaseModel]) -> Callable[[Request], Any]:
    async def validate_body(request: Request) -> None:
        try:
            payload = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            payload = None

        result = validate_payload(schema, payload)
        if not result.ok:
            raise _reject(request, Stage.BODY, ErrorKind.VALIDATION_ERROR, result.error)
        request.state.payload = result.value

    return validate_body


@dataclass(frozen=True, slots=True)
class Pipeline:
    steps: tuple[Callable[..., Any], ...] = ()
    stages: tuple[Stage, ...] = ()

    def require_token(self) -> Pipeline:
        return self._then(Stage.TOKEN, authenticate)

    def require(self, *guards: Guard) -> Pipeline:
        if Stage.TOKEN not in self.stages:
            raise PipelineOrderError("role guards need require_token() first")
        return self._then(Stage.ROLE, _guard_step(guards))

    def require_role(self, role: Role) -> Pipeline:
        return self.require(has_any_role(role))

    def require_any_role(self, *roles: Role) -> Pipeline:
        return self.require(has_any_role(*roles))

    def require_verified_vendor(self) -> Pipeline:
        return self.require(is_verified_vendor)

    def require_vendor(self) -> Pipeline:
        return self.require(is_unverified_vendor_allowed)

    def check_identifier(self, param: str = "id") -> Pipeline:
        return self._then(Stage.IDENTIFIER, _identifier_step(param))

    def validate_body(self, schema: type[BaseModel]) -> Pipeline:
        return self._then(Stage.BODY, _body_step(schema))

    @property
    def dependencies(self) -> list[DependsParam]:
        return [Depends(step) for step in self.steps]

    def _then(self, stage: Stage, step: Callable[..., Any]) -> Pipeline:
        if self.stages and stage < self.stages[-1]:
            raise PipelineOrderError(f"{stage.name.lower()} step cannot follow {self.stages[-1].name.lower()}")
        if stage is not Stage.ROLE and stage in self.stages:
            raise PipelineOrderError(f"{stage.name.lower()} step declared twice")
        return replace(self, steps=(*self.steps, step), stages=(*self.stages, stage))


def current_principal(request: Request) -> Principal:
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise ApiError(ErrorKind.MISSING_TOKEN)
    return principal


def validated_body(request: Request) -> Any:
    """The payload produced by the pipeline's body step."""
    return request.state.payload


CurrentPrincipal = Annotated[Principal, Depends(current_principal)]


__all__ = [
    "CurrentPrincipal",
    "Pipeline",
    "PipelineOrderError",
    "Stage",
    "authenticate",
    "current_principal",
    "validated_body",
]
