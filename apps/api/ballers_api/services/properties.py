"""Property service layer."""

from collections.abc import Mapping
import logging

from ballers_api.core.logging_safety import safe_log_identifier
from ballers_api.domain.pagination import DEFAULT_LIMIT, FilterField, FilterKind, Page, paginate
from ballers_api.domain.query import Predicate
from ballers_api.errors import ApiError, ErrorKind
from ballers_api.repositories.memory import PROPERTIES, InMemoryStore
from ballers_api.schemas.auth import Principal, Role
from ballers_api.schemas.property import AddPropertyRequest, Property, UpdatePropertyRequest

logger = logging.getLogger(__name__)

PROPERTY_FILTERS = (
    FilterField("name", "name", FilterKind.CONTAINS),
    FilterField("houseType", "house_type"),
    FilterField("state", "address.state"),
    FilterField("city", "address.city"),
    FilterField("minPrice", "price", FilterKind.MIN, sortable=True),
    FilterField("maxPrice", "price", FilterKind.MAX),
    FilterField("bedrooms", "bedrooms", FilterKind.INTEGER),
    FilterField("createdAt", "created_at", FilterKind.DATE, sortable=True),
)


def _flatten(changes: dict, prefix: str = "") -> dict:
    flat = {}
    for key, value in changes.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict) and key == "address":
            flat.update(_flatten(value, f"{path}."))
        else:
            flat[path] = value
    return flat


class PropertyService:
    def __init__(self, store: InMemoryStore, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._default_limit = default_limit
        self._properties = store.collection(PROPERTIES)

    def add_property(self, *, vendor_id: str, payload: AddPropertyRequest) -> Property:
        record = self._properties.insert(
            {**payload.model_dump(), "added_by": vendor_id, "updated_by": vendor_id}
        )
        logger.info(
            "property.added property_id=%s vendor_id=%s",
            safe_log_identifier(record["id"], prefix="prid"),
            safe_log_identifier(vendor_id, prefix="uid"),
        )
        return Property.model_validate(record)

    def update_property(self, *, principal: Principal, property_id: str, payload: UpdatePropertyRequest) -> Property:
        record = self._get_record(property_id)
        if record["added_by"] != principal.id:
            raise ApiError(ErrorKind.FORBIDDEN)

        changes = _flatten(payload.model_dump(exclude_none=True))
        updated = self._properties.update_by_id(property_id, {**changes, "updated_by": principal.id})
        if updated is None:
            raise ApiError(ErrorKind.WRITE_FAILURE, "Error updating property")
        return Property.model_validate(updated)

    def delete_property(self, *, principal: Principal, property_id: str) -> Property:
        record = self._get_record(property_id)
        if principal.role is not Role.ADMIN and record["added_by"] != principal.id:
            raise ApiError(ErrorKind.FORBIDDEN)

        self._properties.delete_by_id(property_id)
        logger.info(
            "property.deleted property_id=%s by=%s",
            safe_log_identifier(property_id, prefix="prid"),
            safe_log_identifier(principal.id, prefix="uid"),
        )
        return Property.model_validate(record)

    def get_property(self, *, property_id: str) -> Property:
        return Property.model_validate(self._get_record(property_id))

    def list_properties(self, *, principal: Principal, query: Mapping[str, str]) -> Page[Property]:
        base = Predicate.where(added_by=principal.id) if principal.role is Role.VENDOR else None
        page = paginate(
            query,
            self._properties,
            PROPERTY_FILTERS,
            base=base,
            default_limit=self._default_limit,
        )
        return page.map(Property.model_validate)

    def search_properties(self, *, query: Mapping[str, str]) -> Page[Property]:
        page = paginate(query, self._properties, PROPERTY_FILTERS, default_limit=self._default_limit)
        return page.map(Property.model_validate)

    def _get_record(self, property_id: str) -> dict:
        record = self._properties.find_by_id(property_id)
        if record is None:
            raise ApiError(ErrorKind.NOT_FOUND, "Property not found")
        return record
