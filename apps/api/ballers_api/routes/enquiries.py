"""Enquiry routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ballers_api.routes.dependencies import Query, get_enquiry_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse
from ballers_api.schemas.enquiry import AddEnquiryRequest, ApproveEnquiryRequest, Enquiry, EnquiryResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.services.enquiries import EnquiryService

router = APIRouter(prefix="/enquiry", tags=["Enquiry"])

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/add",
    response_model=EnquiryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=Pipeline().require_token().require_role(Role.USER).validate_body(AddEnquiryRequest).dependencies,
    responses=_GUARDED,
)
async def add_enquiry(
    payload: Annotated[AddEnquiryRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[EnquiryService, Depends(get_enquiry_service)],
) -> EnquiryResponse:
    return EnquiryResponse(message="Enquiry added", enquiry=service.add_enquiry(user_id=principal.id, payload=payload))


@router.put(
    "/approve",
    response_model=EnquiryResponse,
    dependencies=(
        Pipeline().require_token().require_role(Role.ADMIN).validate_body(ApproveEnquiryRequest).dependencies
    ),
    responses=_GUARDED,
)
async def approve_enquiry(
    payload: Annotated[ApproveEnquiryRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[EnquiryService, Depends(get_enquiry_service)],
) -> EnquiryResponse:
    return EnquiryResponse(
        message="Enquiry approved",
        enquiry=service.approve_enquiry(enquiry_id=payload.enquiry_id, admin_id=principal.id),
    )


@router.get(
    "/all",
    response_model=ListResponse[Enquiry],
    dependencies=Pipeline().require_token().dependencies,
    responses=_GUARDED,
)
async def list_enquiries(
    query: Query,
    principal: CurrentPrincipal,
    service: Annotated[EnquiryService, Depends(get_enquiry_service)],
) -> ListResponse[Enquiry]:
    page = service.list_enquiries(principal=principal, query=query)
    return ListResponse[Enquiry](result=page.result, pagination=page.pagination)


@router.get(
    "/{id}",
    response_model=EnquiryResponse,
    dependencies=Pipeline().require_token().check_identifier().dependencies,
    responses=_GUARDED,
)
async def get_enquiry(
    enquiry_id: Annotated[str, Path(alias="id")],
    principal: CurrentPrincipal,
    service: Annotated[EnquiryService, Depends(get_enquiry_service)],
) -> EnquiryResponse:
    return EnquiryResponse(enquiry=service.get_enquiry(principal=principal, enquiry_id=enquiry_id))
