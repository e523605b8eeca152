"""In-memory document store used by the API and tests."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from itertools import count
from typing import Any

from ballers_api.domain.identifiers import new_identifier
from ballers_api.domain.query import MATCH_ALL, Predicate, Sort, SortDirection, resolve_path
from ballers_api.repositories.base import Collection, Document, DuplicateKeyError

USERS = "users"
PROPERTIES = "properties"
BADGES = "badges"
ASSIGNED_BADGES = "assigned_badges"
ENQUIRIES = "enquiries"
VISITATIONS = "visitations"
NOTIFICATIONS = "notifications"
KNOWLEDGE_BASE = "knowledge_base"
REFERRALS = "referrals"

_UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {
    USERS: ("email", "referral_code"),
    KNOWLEDGE_BASE: ("slug",),
}


def _set_path(document: Document, path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    target = document
    for part in parents:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[leaf] = value


def _sort_key(value: Any) -> tuple[bool, Any]:
    # Missing values sort before present ones.
    return (value is not None, value)


class InMemoryCollection(Collection):
    """Deterministic collection keeping documents in insertion order."""

    def __init__(self, name: str, unique_fields: tuple[str, ...] = ()) -> None:
        self.name = name
        self.unique_fields = unique_fields
        self.write_count = 0
        self._documents: dict[str, Document] = {}
        self._sequence: dict[str, int] = {}
        self._counter = count()

    def find(
        self,
        predicate: Predicate = MATCH_ALL,
        *,
        skip: int = 0,
        limit: int | None = None,
        sort: tuple[Sort, ...] = (),
    ) -> list[Document]:
        matches = [document for document in self._documents.values() if predicate.matches(document)]
        for position in reversed(range(len(sort))):
            order = sort[position]
            # The primary order breaks ties by insertion sequence, in its own direction.
            tie_break = position == 0
            matches.sort(
                key=lambda document: (
                    _sort_key(self._value(document, order.field)),
                    self._sequence[document["id"]] if tie_break else 0,
                ),
                reverse=order.direction is SortDirection.DESC,
            )
        end = None if limit is None else skip + limit
        return [deepcopy(document) for document in matches[skip:end]]

    def count(self, predicate: Predicate = MATCH_ALL) -> int:
        return sum(1 for document in self._documents.values() if predicate.matches(document))

    def find_by_id(self, document_id: str) -> Document | None:
        document = self._documents.get(document_id)
        return deepcopy(document) if document is not None else None

    def find_one(self, predicate: Predicate) -> Document | None:
        for document in self._documents.values():
            if predicate.matches(document):
                return deepcopy(document)
        return None

    def insert(self, document: Document) -> Document:
        now = datetime.now(UTC)
        stored = deepcopy(document)
        stored.setdefault("id", new_identifier())
        stored.setdefault("created_at", now)
        stored["updated_at"] = now
        self._ensure_unique(stored)
        self._documents[stored["id"]] = stored
        self._sequence[stored["id"]] = next(self._counter)
        self.write_count += 1
        return deepcopy(stored)

    def update_by_id(self, document_id: str, changes: Document) -> Document | None:
        current = self._documents.get(document_id)
        if current is None:
            return None
        updated = deepcopy(current)
        for path, value in changes.items():
            _set_path(updated, path, deepcopy(value))
        updated["updated_at"] = datetime.now(UTC)
        self._ensure_unique(updated)
        self._documents[document_id] = updated
        self.write_count += 1
        return deepcopy(updated)

    def update_many(self, predicate: Predicate, changes: Document) -> int:
        matched = [document["id"] for document in self._documents.values() if predicate.matches(document)]
        for document_id in matched:
            self.update_by_id(document_id, changes)
        return len(matched)

    def delete_by_id(self, document_id: str) -> Document | None:
        document = self._documents.pop(document_id, None)
        if document is None:
            return None
        self._sequence.pop(document_id, None)
        self.write_count += 1
        return document

    def clear(self) -> None:
        self._documents.clear()
        self._sequence.clear()

    def _ensure_unique(self, candidate: Document) -> None:
        for unique_field in self.unique_fields:
            value = resolve_path(candidate, unique_field)
            if value is None or not isinstance(value, (str, int)):
                continue
            for document in self._documents.values():
                if document["id"] != candidate["id"] and resolve_path(document, unique_field) == value:
                    raise DuplicateKeyError(self.name, unique_field)

    @staticmethod
    def _value(document: Document, path: str) -> Any:
        value = resolve_path(document, path)
        return value if isinstance(value, (str, int, float, date)) else None


@dataclass(slots=True)
class InMemoryStore:
    """Named collections making up the application's data."""

    collections: dict[str, InMemoryCollection] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in (
            USERS,
            PROPERTIES,
            BADGES,
            ASSIGNED_BADGES,
            ENQUIRIES,
            VISITATIONS,
            NOTIFICATIONS,
            KNOWLEDGE_BASE,
            REFERRALS,
        ):
            self.collections.setdefault(name, InMemoryCollection(name, _UNIQUE_FIELDS.get(name, ())))

    def collection(self, name: str) -> InMemoryCollection:
        return self.collections[name]

    @property
    def write_count(self) -> int:
        return sum(collection.write_count for collection in self.collections.values())

    def close(self) -> None:
        for collection in self.collections.values():
            collection.clear()


__all__ = [
    "ASSIGNED_BADGES",
    "BADGES",
    "ENQUIRIES",
    "InMemoryCollection",
    "InMemoryStore",
    "KNOWLEDGE_BASE",
    "NOTIFICATIONS",
    "PROPERTIES",
    "REFERRALS",
    "USERS",
    "VISITATIONS",
]
