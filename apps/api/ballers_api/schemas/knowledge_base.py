"""Knowledge base API schemas."""

from datetime import datetime

from pydantic import Field

from ballers_api.schemas.common import ApiModel, ObjectIdStr


class AddPostRequest(ApiModel):
    title: str = Field(min_length=1, title="Title")
    body: str = Field(min_length=1, title="Body")
    image: str | None = Field(default=None, title="Image")
    tags: list[str] = Field(default_factory=list, title="Tags")


class UpdatePostRequest(ApiModel):
    id: ObjectIdStr = Field(title="Post ID")
    title: str | None = Field(default=None, min_length=1, title="Title")
    body: str | None = Field(default=None, min_length=1, title="Body")
    image: str | None = Field(default=None, title="Image")
    tags: list[str] | None = Field(default=None, title="Tags")


class Post(ApiModel):
    id: str
    title: str
    slug: str
    body: str
    image: str | None = None
    tags: list[str] = []
    read_length: int
    author: str
    updated_by: str
    created_at: datetime
    updated_at: datetime


class PostResponse(ApiModel):
    success: bool = True
    message: str | None = None
    post: Post
