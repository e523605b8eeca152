"""Badge and assigned-badge service layer."""

from collections.abc import Mapping
import logging

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import AnyOf, Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import ASSIGNED_BADGES, BADGES, USERS, InMemoryStore
from ballers_api.schemas.badge import (
    AddBadgeRequest,
    AssignedBadge,
    AutomatedBadge,
    Badge,
    BadgeAccessLevel,
    UpdateBadgeRequest,
)
from ballers_api.schemas.notification import NotificationType
from ballers_api.services.notifications import NotificationService

logger = logging.getLogger(__name__)

SYSTEM_ASSIGNER = "system"

BADGE_FILTERS = (
    FilterField("name", "name", FilterKind.CONTAINS, sortable=True),
    FilterField("assignedRole", "assigned_role"),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


class BadgeService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._badges = store.collection(BADGES)
        self._assigned = store.collection(ASSIGNED_BADGES)

    def add_badge(self, *, payload: AddBadgeRequest, added_by: str) -> Badge:
        record = self._badges.insert({**payload.model_dump(mode="json"), "added_by": added_by})
        return Badge.model_validate(record)

    def update_badge(self, *, payload: UpdateBadgeRequest) -> Badge:
        self.get_badge(badge_id=payload.id)
        changes = payload.model_dump(mode="json", exclude={"id"}, exclude_none=True)
        record = self._badges.update_by_id(payload.id, changes)
        if record is None:
            raise ApiError(ErrorKind.WRITE_FAILURE, "Error updating badge")
        return Badge.model_validate(record)

    def delete_badge(self, *, badge_id: str) -> Badge:
        badge = self.get_badge(badge_id=badge_id)
        attached = self._assigned.count(Predicate.where(badge_id=badge_id))
        if attached > 0:
            raise ApiError(
                ErrorKind.CONFLICT,
                f"Badge has been assigned to {attached} {'users' if attached > 1 else 'user'}",
            )

        self._badges.delete_by_id(badge_id)
        return badge

    def get_badge(self, *, badge_id: str) -> Badge:
        record = self._badges.find_by_id(badge_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Badge not found")
        return Badge.model_validate(record)

    def list_badges(self, *, query: Mapping[str, str]) -> Page[Badge]:
        page = paginate(query, self._badges, BADGE_FILTERS, default_limit=self._default_limit)
        return page.map(Badge.model_validate)

    def list_badges_for_role(self, *, role: BadgeAccessLevel) -> list[Badge]:
        levels = tuple({BadgeAccessLevel.ALL.value, role.value})
        return [Badge.model_validate(record) for record in self._badges.find(Predicate((AnyOf("assigned_role", levels),)))]


class AssignedBadgeService:
    def __init__(self, store: InMemoryStore) -> None:
        self._badges = store.collection(BADGES)
        self._assigned = store.collection(ASSIGNED_BADGES)
        self._users = store.collection(USERS)
        self._notifications = NotificationService(store)

    def assign_badge(self, *, badge_id: str, user_id: str, assigned_by: str) -> AssignedBadge:
        badge = self._badges.find_by_id(badge_id)
        if badge is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Badge not found")
        if self._users.find_by_id(user_id) is None:
            raise ApiError(ErrorKind.NOT_FOUND, "User not found")
        if self._assigned.find_one(Predicate.where(badge_id=badge_id, user_id=user_id)) is not None:
            raise ApiError(ErrorKind.CONFLICT, "Badge already assigned to user")

        return self._assign(badge=badge, user_id=user_id, assigned_by=assigned_by)

    def assign_automated_badge(self, *, user_id: str, automated_badge: AutomatedBadge) -> AssignedBadge | None:
        """Award a system badge if an admin has created it; skipped otherwise."""
        badge = self._badges.find_one(Predicate.where(automated_badge=automated_badge.value))
        if badge is None:
            logger.info("badge.automated_skipped badge=%s reason=badge_not_created", automated_badge.value)
            return None
        if self._assigned.find_one(Predicate.where(badge_id=badge["id"], user_id=user_id)) is not None:
            return None

        return self._assign(badge=badge, user_id=user_id, assigned_by=SYSTEM_ASSIGNER)

    def delete_assigned_badge(self, *, assigned_badge_id: str) -> AssignedBadge:
        record = self._assigned.delete_by_id(assigned_badge_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Assigned badge not found")
        return AssignedBadge.model_validate(record)

    def list_for_user(self, *, user_id: str) -> list[AssignedBadge]:
        assigned = []
        for record in self._assigned.find(Predicate.where(user_id=user_id)):
            badge = self._badges.find_by_id(record["badge_id"])
            assigned.append(AssignedBadge.model_validate({**record, "badge": badge}))
        return assigned

    def _assign(self, *, badge: dict, user_id: str, assigned_by: str) -> AssignedBadge:
        record = self._assigned.insert({"badge_id": badge["id"], "user_id": user_id, "assigned_by": assigned_by})
        logger.info(
            "badge.assigned badge_id=%s user_id=%s",
            safe_log_identifier(badge["id"], prefix="bid"),
            safe_log_identifier(user_id, prefix="uid"),
        )
        self._notifications.create(
            user_id=user_id,
            description=f"You have been awarded the {badge['name']} badge",
            type=NotificationType.SUCCESS,
        )
        return AssignedBadge.model_validate({**record, "badge": badge})
