"""Property visitation service layer."""

from collections.abc import Mapping
import logging

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import PROPERTIES, VISITATIONS, InMemoryStore
from ballers_api.schemas.auth import Principal, Role
from ballers_api.schemas.notification import NotificationType
from ballers_api.schemas.visitation import ScheduleVisitRequest, Visitation
from ballers_api.services.notifications import NotificationService

logger = logging.getLogger(__name__)

VISITATION_FILTERS = (
    FilterField("propertyId", "property_id"),
    FilterField("visitDate", "visit_date", FilterKind.DATE, sortable=True),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


class VisitationService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._visitations = store.collection(VISITATIONS)
        self._properties = store.collection(PROPERTIES)
        self._notifications = NotificationService(store)

    def schedule_visit(self, *, user_id: str, payload: ScheduleVisitRequest) -> Visitation:
        property_record = self._properties.find_by_id(payload.property_id)
        if property_record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Property not found")

        record = self._visitations.insert(
            {**payload.model_dump(), "user_id": user_id, "vendor_id": property_record["added_by"]}
        )
        logger.info(
            "visitation.scheduled visitation_id=%s property_id=%s",
            safe_log_identifier(record["id"], prefix="vid"),
            safe_log_identifier(payload.property_id, prefix="prid"),
        )
        self._notifications.create(
            user_id=property_record["added_by"],
            description=f"A visit has been scheduled for {property_record['name']}",
            type=NotificationType.INFO,
        )
        return Visitation.model_validate(record)

    def list_visitations(self, *, principal: Principal, query: Mapping[str, str]) -> Page[Visitation]:
        base = Predicate.where(vendor_id=principal.id) if principal.role is Role.VENDOR else None
        page = paginate(
            query,
            self._visitations,
            VISITATION_FILTERS,
            base=base,
            default_limit=self._default_limit,
        )
        return page.map(Visitation.model_validate)
