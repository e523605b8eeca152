"""Enquiry service layer."""

from collections.abc import Mapping
from datetime import UTC, datetime
import logging

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import ENQUIRIES, PROPERTIES, InMemoryStore
from ballers_api.schemas.auth import Principal, Role
from ballers_api.schemas.enquiry import AddEnquiryRequest, Enquiry
from ballers_api.schemas.notification import NotificationType
from ballers_api.services.notifications import NotificationService

logger = logging.getLogger(__name__)

ENQUIRY_FILTERS = (
    FilterField("approved", "approved", FilterKind.BOOLEAN),
    FilterField("propertyId", "property_id"),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


def visible_to(principal: Principal) -> Predicate | None:
    """Records a principal may see: users their own, vendors those on their properties."""
    if principal.role is Role.ADMIN:
        return None
    if principal.role is Role.VENDOR:
        return Predicate.where(vendor_id=principal.id)
    return Predicate.where(user_id=principal.id)


class EnquiryService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._enquiries = store.collection(ENQUIRIES)
        self._properties = store.collection(PROPERTIES)
        self._notifications = NotificationService(store)

    def add_enquiry(self, *, user_id: str, payload: AddEnquiryRequest) -> Enquiry:
        property_record = self._properties.find_by_id(payload.property_id)
        if property_record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Property not found")

        record = self._enquiries.insert(
            {
                **payload.model_dump(),
                "user_id": user_id,
                "vendor_id": property_record["added_by"],
                "approved": False,
            }
        )
        logger.info(
            "enquiry.added enquiry_id=%s property_id=%s",
            safe_log_identifier(record["id"], prefix="eid"),
            safe_log_identifier(payload.property_id, prefix="prid"),
        )
        self._notifications.create(
            user_id=property_record["added_by"],
            description=f"You have a new enquiry for {property_record['name']}",
            type=NotificationType.INFO,
        )
        return Enquiry.model_validate(record)

    def approve_enquiry(self, *, enquiry_id: str, admin_id: str) -> Enquiry:
        record = self._enquiries.update_by_id(
            enquiry_id,
            {"approved": True, "approved_by": admin_id, "approval_date": datetime.now(UTC)},
        )
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Enquiry not found")

        self._notifications.create(
            user_id=record["user_id"],
            description=f"Your enquiry for {record['title']} has been approved",
            type=NotificationType.SUCCESS,
        )
        return Enquiry.model_validate(record)

    def get_enquiry(self, *, principal: Principal, enquiry_id: str) -> Enquiry:
        predicate = Predicate.where(id=enquiry_id)
        scope = visible_to(principal)
        record = self._enquiries.find_one(predicate if scope is None else predicate.and_(scope))
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Enquiry not found")
        return Enquiry.model_validate(record)

    def list_enquiries(self, *, principal: Principal, query: Mapping[str, str]) -> Page[Enquiry]:
        page = paginate(
            query,
            self._enquiries,
            ENQUIRY_FILTERS,
            base=visible_to(principal),
            default_limit=self._default_limit,
        )
        return page.map(Enquiry.model_validate)
