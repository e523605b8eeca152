"""Badge and badge assignment routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ballers_api.routes.dependencies import Query, get_assigned_badge_service, get_badge_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.badge import (
    AddBadgeRequest,
    AssignBadgeRequest,
    AssignedBadge,
    AssignedBadgeResponse,
    Badge,
    BadgeAccessLevel,
    BadgeResponse,
    UpdateBadgeRequest,
)
from ballers_api.schemas.common import CollectionResponse, ListResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.services.badges import AssignedBadgeService, BadgeService

router = APIRouter(prefix="/badge", tags=["Badge"])
assigned_router = APIRouter(prefix="/assign-badge", tags=["Assign Badge"])

_ADMIN = Pipeline().require_token().require_role(Role.ADMIN)
_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/add",
    response_model=BadgeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN.validate_body(AddBadgeRequest).dependencies,
    responses=_GUARDED,
)
async def add_badge(
    payload: Annotated[AddBadgeRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> BadgeResponse:
    return BadgeResponse(message="Badge added", badge=service.add_badge(payload=payload, added_by=principal.id))


@router.put(
    "/update",
    response_model=BadgeResponse,
    dependencies=_ADMIN.validate_body(UpdateBadgeRequest).dependencies,
    responses=_GUARDED,
)
async def update_badge(
    payload: Annotated[UpdateBadgeRequest, Depends(validated_body)],
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> BadgeResponse:
    return BadgeResponse(message="Badge updated", badge=service.update_badge(payload=payload))


@router.delete(
    "/delete/{id}",
    response_model=BadgeResponse,
    dependencies=_ADMIN.check_identifier().dependencies,
    responses=_GUARDED,
)
async def delete_badge(
    badge_id: Annotated[str, Path(alias="id")],
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> BadgeResponse:
    return BadgeResponse(message="Badge deleted", badge=service.delete_badge(badge_id=badge_id))


@router.get(
    "/all",
    response_model=ListResponse[Badge],
    dependencies=_ADMIN.dependencies,
    responses=_GUARDED,
)
async def list_badges(
    query: Query,
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> ListResponse[Badge]:
    page = service.list_badges(query=query)
    return ListResponse[Badge](result=page.result, pagination=page.pagination)


@router.get(
    "/role/{role}",
    response_model=CollectionResponse[Badge],
    dependencies=_ADMIN.dependencies,
    responses=_GUARDED,
)
async def list_badges_for_role(
    role: BadgeAccessLevel,
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> CollectionResponse[Badge]:
    return CollectionResponse[Badge](result=service.list_badges_for_role(role=role))


@router.get(
    "/{id}",
    response_model=BadgeResponse,
    dependencies=_ADMIN.check_identifier().dependencies,
    responses=_GUARDED,
)
async def get_badge(
    badge_id: Annotated[str, Path(alias="id")],
    service: Annotated[BadgeService, Depends(get_badge_service)],
) -> BadgeResponse:
    return BadgeResponse(badge=service.get_badge(badge_id=badge_id))


@assigned_router.post(
    "/add",
    response_model=AssignedBadgeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN.validate_body(AssignBadgeRequest).dependencies,
    responses=_GUARDED,
)
async def assign_badge(
    payload: Annotated[AssignBadgeRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[AssignedBadgeService, Depends(get_assigned_badge_service)],
) -> AssignedBadgeResponse:
    assigned = service.assign_badge(badge_id=payload.badge_id, user_id=payload.user_id, assigned_by=principal.id)
    return AssignedBadgeResponse(message="Badge assigned", assigned_badge=assigned)


@assigned_router.delete(
    "/delete/{id}",
    response_model=AssignedBadgeResponse,
    dependencies=_ADMIN.check_identifier().dependencies,
    responses=_GUARDED,
)
async def delete_assigned_badge(
    assigned_badge_id: Annotated[str, Path(alias="id")],
    service: Annotated[AssignedBadgeService, Depends(get_assigned_badge_service)],
) -> AssignedBadgeResponse:
    return AssignedBadgeResponse(
        message="Assigned badge deleted",
        assigned_badge=service.delete_assigned_badge(assigned_badge_id=assigned_badge_id),
    )


@assigned_router.get(
    "/me",
    response_model=CollectionResponse[AssignedBadge],
    dependencies=Pipeline().require_token().dependencies,
    responses=_GUARDED,
)
async def list_my_badges(
    principal: CurrentPrincipal,
    service: Annotated[AssignedBadgeService, Depends(get_assigned_badge_service)],
) -> CollectionResponse[AssignedBadge]:
    return CollectionResponse[AssignedBadge](result=service.list_for_user(user_id=principal.id))


@assigned_router.get(
    "/user/{id}",
    response_model=CollectionResponse[AssignedBadge],
    dependencies=_ADMIN.check_identifier().dependencies,
    responses=_GUARDED,
)
async def list_user_badges(
    user_id: Annotated[str, Path(alias="id")],
    service: Annotated[AssignedBadgeService, Depends(get_assigned_badge_service)],
) -> CollectionResponse[AssignedBadge]:
    return CollectionResponse[AssignedBadge](result=service.list_for_user(user_id=user_id))
