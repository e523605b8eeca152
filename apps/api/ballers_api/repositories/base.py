"""Data collaborator interface."""

from abc import ABC, abstractmethod
from typing import Any

from ballers_api.domain.query import MATCH_ALL, Predicate, Sort

Document = dict[str, Any]


class DuplicateKeyError(Exception):
    """Raised when a write would break a collection's uniqueness constraint."""

    def __init__(self, collection: str, field: str) -> None:
        self.collection = collection
        self.field = field
        super().__init__(f"Duplicate value for {collection}.{field}")


class Collection(ABC):
    """Document collection queried through storage-neutral predicates.

    Reads return copies; mutating a returned document never changes storage.
    """

    name: str

    @abstractmethod
    def find(
        self,
        predicate: Predicate = MATCH_ALL,
        *,
        skip: int = 0,
        limit: int | None = None,
        sort: tuple[Sort, ...] = (),
    ) -> list[Document]:
        """Return matching documents in ``sort`` order, ties in insertion order."""

    @abstractmethod
    def count(self, predicate: Predicate = MATCH_ALL) -> int:
        """Count matching documents, ignoring paging and order."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> Document | None:
        """Return one document or ``None``."""

    @abstractmethod
    def find_one(self, predicate: Predicate) -> Document | None:
        """Return the first matching document in insertion order or ``None``."""

    @abstractmethod
    def insert(self, document: Document) -> Document:
        """Store a new document, stamping ``id``, ``created_at`` and ``updated_at``."""

    @abstractmethod
    def update_by_id(self, document_id: str, changes: Document) -> Document | None:
        """Apply ``changes`` (dotted keys allowed) and return the updated document."""

    @abstractmethod
    def update_many(self, predicate: Predicate, changes: Document) -> int:
        """Apply ``changes`` to every match and return how many were updated."""

    @abstractmethod
    def delete_by_id(self, document_id: str) -> Document | None:
        """Delete and return the document, or ``None`` when absent."""


__all__ = ["Collection", "Document", "DuplicateKeyError"]
