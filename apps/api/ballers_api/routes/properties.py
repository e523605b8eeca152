"""Property routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ballers_api.routes.dependencies import Query, get_property_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.property import AddPropertyRequest, Property, PropertyResponse, UpdatePropertyRequest
from ballers_api.services.properties import PropertyService

router = APIRouter(prefix="/property", tags=["Property"])

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/add",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=Pipeline().require_token().require_verified_vendor().validate_body(AddPropertyRequest).dependencies,
    responses=_GUARDED,
)
async def add_property(
    payload: Annotated[AddPropertyRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertyResponse:
    return PropertyResponse(
        message="Property added",
        property=service.add_property(vendor_id=principal.id, payload=payload),
    )


@router.put(
    "/update/{id}",
    response_model=PropertyResponse,
    dependencies=(
        Pipeline()
        .require_token()
        .require_vendor()
        .check_identifier()
        .validate_body(UpdatePropertyRequest)
        .dependencies
    ),
    responses=_GUARDED,
)
async def update_property(
    property_id: Annotated[str, Path(alias="id")],
    payload: Annotated[UpdatePropertyRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertyResponse:
    return PropertyResponse(
        message="Property updated",
        property=service.update_property(principal=principal, property_id=property_id, payload=payload),
    )


@router.delete(
    "/delete/{id}",
    response_model=PropertyResponse,
    dependencies=Pipeline().require_token().require_any_role(Role.VENDOR, Role.ADMIN).check_identifier().dependencies,
    responses=_GUARDED,
)
async def delete_property(
    property_id: Annotated[str, Path(alias="id")],
    principal: CurrentPrincipal,
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertyResponse:
    return PropertyResponse(
        message="Property deleted",
        property=service.delete_property(principal=principal, property_id=property_id),
    )


@router.get(
    "/all",
    response_model=ListResponse[Property],
    dependencies=Pipeline().require_token().require_any_role(Role.VENDOR, Role.ADMIN).dependencies,
    responses=_GUARDED,
)
async def list_properties(
    query: Query,
    principal: CurrentPrincipal,
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> ListResponse[Property]:
    page = service.list_properties(principal=principal, query=query)
    return ListResponse[Property](result=page.result, pagination=page.pagination)


@router.get(
    "/search",
    response_model=ListResponse[Property],
    dependencies=Pipeline().require_token().dependencies,
    responses=_GUARDED,
)
async def search_properties(
    query: Query,
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> ListResponse[Property]:
    page = service.search_properties(query=query)
    return ListResponse[Property](result=page.result, pagination=page.pagination)


@router.get(
    "/{id}",
    response_model=PropertyResponse,
    dependencies=Pipeline().require_token().check_identifier().dependencies,
    responses=_GUARDED,
)
async def get_property(
    property_id: Annotated[str, Path(alias="id")],
    service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertyResponse:
    return PropertyResponse(property=service.get_property(property_id=property_id))
