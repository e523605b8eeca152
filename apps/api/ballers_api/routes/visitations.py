"""Property visitation routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ballers_api.routes.dependencies import Query, get_visitation_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.visitation import ScheduleVisitRequest, Visitation, VisitationResponse
from ballers_api.services.visitations import VisitationService

router = APIRouter(prefix="/visit", tags=["Visitation"])

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/schedule",
    response_model=VisitationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=Pipeline().require_token().require_role(Role.USER).validate_body(ScheduleVisitRequest).dependencies,
    responses=_GUARDED,
)
async def schedule_visit(
    payload: Annotated[ScheduleVisitRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[VisitationService, Depends(get_visitation_service)],
) -> VisitationResponse:
    return VisitationResponse(
        message="Visit scheduled",
        schedule=service.schedule_visit(user_id=principal.id, payload=payload),
    )


@router.get(
    "/all",
    response_model=ListResponse[Visitation],
    dependencies=Pipeline().require_token().require_any_role(Role.VENDOR, Role.ADMIN).dependencies,
    responses=_GUARDED,
)
async def list_visitations(
    query: Query,
    principal: CurrentPrincipal,
    service: Annotated[VisitationService, Depends(get_visitation_service)],
) -> ListResponse[Visitation]:
    page = service.list_visitations(principal=principal, query=query)
    return ListResponse[Visitation](result=page.result, pagination=page.pagination)
