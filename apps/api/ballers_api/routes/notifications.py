"""Notification routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from ballers_api.routes.dependencies import Query, get_notification_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline
from ballers_api.schemas.common import ListResponse, MessageResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.notification import Notification, NotificationResponse
from ballers_api.services.notifications import NotificationService

router = APIRouter(prefix="/notification", tags=["Notification"])

_AUTHENTICATED = Pipeline().require_token()
_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.get(
    "/all",
    response_model=ListResponse[Notification],
    dependencies=_AUTHENTICATED.dependencies,
    responses=_GUARDED,
)
async def list_notifications(
    query: Query,
    principal: CurrentPrincipal,
    service: Annotated[NotificationService, Depends(get_notification_service)],
) -> ListResponse[Notification]:
    page = service.list_notifications(user_id=principal.id, query=query)
    return ListResponse[Notification](result=page.result, pagination=page.pagination)


@router.put(
    "/all/read",
    response_model=MessageResponse,
    dependencies=_AUTHENTICATED.dependencies,
    responses=_GUARDED,
)
async def mark_all_as_read(
    principal: CurrentPrincipal,
    service: Annotated[NotificationService, Depends(get_notification_service)],
) -> MessageResponse:
    updated = service.mark_all_as_read(user_id=principal.id)
    return MessageResponse(message=f"{updated} notification(s) marked as read")


@router.put(
    "/{id}",
    response_model=NotificationResponse,
    dependencies=_AUTHENTICATED.check_identifier().dependencies,
    responses=_GUARDED,
)
async def mark_as_read(
    notification_id: Annotated[str, Path(alias="id")],
    principal: CurrentPrincipal,
    service: Annotated[NotificationService, Depends(get_notification_service)],
) -> NotificationResponse:
    return NotificationResponse(
        message="Notification marked as read",
        notification=service.mark_as_read(user_id=principal.id, notification_id=notification_id),
    )
