"""Notification service layer."""

from collections.abc import Mapping
import logging

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import NOTIFICATIONS, InMemoryStore
from ballers_api.schemas.notification import Notification, NotificationType

logger = logging.getLogger(__name__)

NOTIFICATION_FILTERS = (
    FilterField("read", "read", FilterKind.BOOLEAN),
    FilterField("type", "type"),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


class NotificationService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._notifications = store.collection(NOTIFICATIONS)

    def create(
        self,
        *,
        user_id: str,
        description: str,
        type: NotificationType = NotificationType.INFO,
        url: str | None = None,
    ) -> Notification:
        record = self._notifications.insert(
            {"user_id": user_id, "description": description, "type": type.value, "url": url, "read": False}
        )
        logger.info(
            "notification.created user_id=%s type=%s",
            safe_log_identifier(user_id, prefix="uid"),
            type.value,
        )
        return Notification.model_validate(record)

    def list_notifications(self, *, user_id: str, query: Mapping[str, str]) -> Page[Notification]:
        page = paginate(
            query,
            self._notifications,
            NOTIFICATION_FILTERS,
            base=Predicate.where(user_id=user_id),
            default_limit=self._default_limit,
        )
        return page.map(Notification.model_validate)

    def mark_as_read(self, *, user_id: str, notification_id: str) -> Notification:
        record = self._notifications.find_one(Predicate.where(id=notification_id, user_id=user_id))
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Notification not found")

        updated = self._notifications.update_by_id(record["id"], {"read": True})
        return Notification.model_validate(updated)

    def mark_all_as_read(self, *, user_id: str) -> int:
        return self._notifications.update_many(Predicate.where(user_id=user_id, read=False), {"read": True})
