"""Knowledge base service layer."""

from collections.abc import Mapping
import logging
import re
import unicodedata

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.base import DuplicateKeyError
from ballers_api.repositories.memory import KNOWLEDGE_BASE, InMemoryStore
from ballers_api.schemas.knowledge_base import AddPostRequest, Post, UpdatePostRequest

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200

POST_FILTERS = (
    FilterField("title", "title", FilterKind.CONTAINS, sortable=True),
    FilterField("tags", "tags"),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


def slugify(title: str) -> str:
    normalized = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")


def reading_time(body: str) -> int:
    """Estimated minutes to read ``body``, never less than one."""
    return max(1, round(len(body.split()) / WORDS_PER_MINUTE))


class KnowledgeBaseService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._posts = store.collection(KNOWLEDGE_BASE)

    def add_post(self, *, author_id: str, payload: AddPostRequest) -> Post:
        slug = slugify(payload.title)
        if self._posts.find_one(Predicate.where(slug=slug)) is not None:
            raise ApiError(ErrorKind.CONFLICT, "An existing post with the same title exists")

        document = {
            **payload.model_dump(),
            "slug": slug,
            "read_length": reading_time(payload.body),
            "author": author_id,
            "updated_by": author_id,
        }
        try:
            record = self._posts.insert(document)
        except DuplicateKeyError as exc:
            raise ApiError(ErrorKind.CONFLICT, "An existing post with the same title exists") from exc

        logger.info("post.added post_id=%s", safe_log_identifier(record["id"], prefix="pid"))
        return Post.model_validate(record)

    def update_post(self, *, editor_id: str, payload: UpdatePostRequest) -> Post:
        self._get_record(payload.id)
        changes = payload.model_dump(exclude={"id"}, exclude_none=True)
        if payload.title is not None:
            slug = slugify(payload.title)
            existing = self._posts.find_one(Predicate.where(slug=slug))
            if existing is not None and existing["id"] != payload.id:
                raise ApiError(ErrorKind.CONFLICT, "Edit post title")
            changes["slug"] = slug
        if payload.body is not None:
            changes["read_length"] = reading_time(payload.body)

        try:
            record = self._posts.update_by_id(payload.id, {**changes, "updated_by": editor_id})
        except DuplicateKeyError as exc:
            raise ApiError(ErrorKind.CONFLICT, "Edit post title") from exc
        if record is None:
            raise ApiError(ErrorKind.WRITE_FAILURE, "Error updating post")
        return Post.model_validate(record)

    def delete_post(self, *, post_id: str) -> Post:
        record = self._get_record(post_id)
        self._posts.delete_by_id(post_id)
        return Post.model_validate(record)

    def get_post_by_slug(self, *, slug: str) -> Post:
        record = self._posts.find_one(Predicate.where(slug=slug))
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Post not found")
        return Post.model_validate(record)

    def list_posts(self, *, query: Mapping[str, str]) -> Page[Post]:
        page = paginate(query, self._posts, POST_FILTERS, default_limit=self._default_limit)
        return page.map(Post.model_validate)

    def _get_record(self, post_id: str) -> dict:
        record = self._posts.find_by_id(post_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Post not found")
        return record
