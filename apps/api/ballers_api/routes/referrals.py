"""Referral routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ballers_api.routes.dependencies import Query, get_referral_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.referral import Referral, ReferralInviteRequest, ReferralInviteResponse
from ballers_api.services.referrals import ReferralService

router = APIRouter(prefix="/referral", tags=["Referral"])

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/invite",
    response_model=ReferralInviteResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=Pipeline().require_token().validate_body(ReferralInviteRequest).dependencies,
    responses=_GUARDED,
)
async def invite(
    payload: Annotated[ReferralInviteRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[ReferralService, Depends(get_referral_service)],
) -> ReferralInviteResponse:
    return ReferralInviteResponse(
        message="Referral invite sent",
        referral=service.invite(referrer=principal, payload=payload),
    )


@router.get(
    "/all",
    response_model=ListResponse[Referral],
    dependencies=Pipeline().require_token().require_role(Role.ADMIN).dependencies,
    responses=_GUARDED,
)
async def list_referrals(
    query: Query,
    service: Annotated[ReferralService, Depends(get_referral_service)],
) -> ListResponse[Referral]:
    page = service.list_referrals(query=query)
    return ListResponse[Referral](result=page.result, pagination=page.pagination)


@router.get(
    "/my-referrals",
    response_model=ListResponse[Referral],
    dependencies=Pipeline().require_token().dependencies,
    responses=_GUARDED,
)
async def list_my_referrals(
    query: Query,
    principal: CurrentPrincipal,
    service: Annotated[ReferralService, Depends(get_referral_service)],
) -> ListResponse[Referral]:
    page = service.list_for_referrer(referrer_id=principal.id, query=query)
    return ListResponse[Referral](result=page.result, pagination=page.pagination)
