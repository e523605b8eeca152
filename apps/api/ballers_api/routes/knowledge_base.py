"""Knowledge base routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ballers_api.routes.dependencies import Query, get_knowledge_base_service
from ballers_api.routes.pipeline import CurrentPrincipal, Pipeline, validated_body
from ballers_api.schemas.auth import Role
from ballers_api.schemas.common import ListResponse
from ballers_api.schemas.error import ErrorResponse
from ballers_api.schemas.knowledge_base import AddPostRequest, Post, PostResponse, UpdatePostRequest
from ballers_api.services.knowledge_base import KnowledgeBaseService

router = APIRouter(prefix="/knowledge-base", tags=["Knowledge Base"])

_EDITORS = Pipeline().require_token().require_any_role(Role.ADMIN, Role.EDITOR)
_GUARDED = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}}


@router.post(
    "/add",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_EDITORS.validate_body(AddPostRequest).dependencies,
    responses=_GUARDED,
)
async def add_post(
    payload: Annotated[AddPostRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[KnowledgeBaseService, Depends(get_knowledge_base_service)],
) -> PostResponse:
    return PostResponse(message="Post added", post=service.add_post(author_id=principal.id, payload=payload))


@router.put(
    "/update",
    response_model=PostResponse,
    dependencies=_EDITORS.validate_body(UpdatePostRequest).dependencies,
    responses=_GUARDED,
)
async def update_post(
    payload: Annotated[UpdatePostRequest, Depends(validated_body)],
    principal: CurrentPrincipal,
    service: Annotated[KnowledgeBaseService, Depends(get_knowledge_base_service)],
) -> PostResponse:
    return PostResponse(message="Post updated", post=service.update_post(editor_id=principal.id, payload=payload))


@router.delete(
    "/delete/{id}",
    response_model=PostResponse,
    dependencies=_EDITORS.check_identifier().dependencies,
    responses=_GUARDED,
)
async def delete_post(
    post_id: Annotated[str, Path(alias="id")],
    service: Annotated[KnowledgeBaseService, Depends(get_knowledge_base_service)],
) -> PostResponse:
    return PostResponse(message="Post deleted", post=service.delete_post(post_id=post_id))


@router.get("/all", response_model=ListResponse[Post], responses={412: {"model": ErrorResponse}})
async def list_posts(
    query: Query,
    service: Annotated[KnowledgeBaseService, Depends(get_knowledge_base_service)],
) -> ListResponse[Post]:
    page = service.list_posts(query=query)
    return ListResponse[Post](result=page.result, pagination=page.pagination)


@router.get("/{slug}", response_model=PostResponse, responses={404: {"model": ErrorResponse}})
async def get_post(
    slug: str,
    service: Annotated[KnowledgeBaseService, Depends(get_knowledge_base_service)],
) -> PostResponse:
    return PostResponse(post=service.get_post_by_slug(slug=slug))
