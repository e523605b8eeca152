"""User account routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ballers_api.routes.dependencies import Query, get_user_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse, MessageResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    User,
    UserResponse,
)
from ballers_api.services.users import UserService

router = APIRouter(prefix="/user", tags=["User"])

_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=Pipeline().validate_body(RegisterRequest).dependencies,
    responses={412: {"model": ErrorResponse}},
)
async def register(
    payload: Annotated[RegisterRequest, Depends(validated_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> TokenResponse:
    return TokenResponse(message="User registered", token=service.register(payload=payload))


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=Pipeline().validate_body(LoginRequest).dependencies,
    responses={401: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def login(
    payload: Annotated[LoginRequest, Depends(validated_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> LoginResponse:
    return LoginResponse(message="Login successful", user=service.login(payload=payload))


@router.get(
    "/activate",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
)
async def activate(
    service: Annotated[UserService, Depends(get_user_service)],
    token: str = "",
) -> UserResponse:
    return UserResponse(
        message="Your account has been successfully activated",
        user=service.activate(token=token),
    )


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    dependencies=Pipeline().validate_body(ResetPasswordRequest).dependencies,
    responses={404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def send_reset_password_link(
    payload: Annotated[ResetPasswordRequest, Depends(validated_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    service.send_reset_password_link(email=payload.email)
    return MessageResponse(message="A password reset link has been sent to your email account")


@router.post(
    "/change-password/{token}",
    response_model=UserResponse,
    dependencies=Pipeline().validate_body(ChangePasswordRequest).dependencies,
    responses={404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def change_password(
    token: str,
    payload: Annotated[ChangePasswordRequest, Depends(validated_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return UserResponse(
        message="Your password has been successfully changed",
        user=service.reset_password(token=token, password=payload.password),
    )


@router.get(
    "/who-am-i",
    response_model=UserResponse,
    dependencies=Pipeline().require_token().dependencies,
    responses=_GUARDED,
)
async def who_am_i(
    principal: CurrentPrincipal,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return UserResponse(user=service.get_user(user_id=principal.id))


@router.get(
    "/all",
    response_model=ListResponse[User],
    dependencies=Pipeline().require_token().require_role(Role.ADMIN).dependencies,
    responses={**_GUARDED, 412: {"model": ErrorResponse}},
)
async def list_users(
    query: Query,
    service: Annotated[UserService, Depends(get_user_service)],
) -> ListResponse[User]:
    page = service.list_users(query=query)
    return ListResponse[User](result=page.result, pagination=page.pagination)


@router.put(
    "/vendor/verify/{id}",
    response_model=UserResponse,
    dependencies=Pipeline().require_token().require_role(Role.ADMIN).check_identifier().dependencies,
    responses={**_GUARDED, 412: {"model": ErrorResponse}},
)
async def verify_vendor(
    vendor_id: Annotated[str, Path(alias="id")],
    principal: CurrentPrincipal,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return UserResponse(
        message="Vendor verified",
        user=service.verify_vendor(vendor_id=vendor_id, admin_id=principal.id),
    )


@router.put(
    "/editor/upgrade/{id}",
    response_model=UserResponse,
    dependencies=Pipeline().require_token().require_role(Role.ADMIN).check_identifier().dependencies,
    responses=_GUARDED,
)
async def upgrade_to_editor(
    user_id: Annotated[str, Path(alias="id")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return UserResponse(message="User is now a Content Editor", user=service.upgrade_to_editor(user_id=user_id))


@router.put(
    "/editor/downgrade/{id}",
    response_model=UserResponse,
    dependencies=Pipeline().require_token().require_role(Role.ADMIN).check_identifier().dependencies,
    responses=_GUARDED,
)
async def downgrade_to_user(
    user_id: Annotated[str, Path(alias="id")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return UserResponse(message="Content Editor is now a User", user=service.downgrade_to_user(user_id=user_id))
