"""Entity store contract.

The entity store is a schemaless document store with equality queries,
conditional updates, atomic set-union and live subscriptions. Records are
plain dicts; the store owns ``id`` and ``created_at``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, Sequence

from huddle.domain.repository.subscription import SnapshotObserver, Subscription

Document = dict[str, Any]
Where = Mapping[str, Any]


class Collection(str, Enum):
    """Collections held by the entity store."""

    ACTIVITIES = "activities"
    JOIN_REQUESTS = "join_requests"
    CHATS = "chats"
    MESSAGES = "messages"
    PROFILES = "profiles"


def matches(document: Document, where: Where | None) -> bool:
    """Check a document against a conjunction of equality filters."""
    if not where:
        return True
    return all(document.get(field) == value for field, value in where.items())


class EntityStore(ABC):
    """Persistence and realtime collaborator."""

    @abstractmethod
    async def get(self, collection: Collection, record_id: str) -> Document | None:
        """Fetch one record.

        Args:
            collection: Collection to read
            record_id: Record ID

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_many(
        self, collection: Collection, record_ids: Sequence[str]
    ) -> dict[str, Document]:
        """Fetch several records in one round-trip.

        Args:
            collection: Collection to read
            record_ids: Record IDs

        Returns:
            Mapping of ID to record for the IDs that exist
        """
        pass

    @abstractmethod
    async def query(
        self,
        collection: Collection,
        where: Where | None = None,
        order_by: Sequence[str] = (),
    ) -> list[Document]:
        """Fetch every record matching all equality filters.

        Args:
            collection: Collection to read
            where: Field/value pairs that must all match
            order_by: Fields to sort by, ascending

        Returns:
            Matching records
        """
        pass

    @abstractmethod
    async def create(
        self,
        collection: Collection,
        fields: Document,
        record_id: str | None = None,
    ) -> Document:
        """Create a record.

        Args:
            collection: Target collection
            fields: Record fields (``id`` and ``created_at`` are store-owned)
            record_id: Explicit ID; generated when omitted

        Returns:
            The stored record

        Raises:
            DuplicateRecordError: If an explicit ID already exists
        """
        pass

    @abstractmethod
    async def update(
        self,
        collection: Collection,
        record_id: str,
        patch: Document,
        when: Where | None = None,
    ) -> Document:
        """Merge a patch into a record, optionally only if it matches ``when``.

        Raises:
            RecordNotFoundError: If the record does not exist
            ConflictError: If the record does not match ``when``
        """
        pass

    @abstractmethod
    async def add_to_set(
        self, collection: Collection, record_id: str, field: str, value: Any
    ) -> Document:
        """Atomically add a value to an array field treated as a set.

        Adding a value that is already present is a no-op.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        pass

    @abstractmethod
    async def delete(self, collection: Collection, record_id: str) -> None:
        """Hard-delete a record.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        pass

    @abstractmethod
    async def subscribe(
        self,
        collection: Collection,
        target: str | Where,
        on_change: SnapshotObserver,
        order_by: Sequence[str] = (),
    ) -> Subscription:
        """Open a live subscription.

        ``target`` is either a record ID (snapshots are the record or None
        once deleted) or an equality predicate (snapshots are the full
        result list). The current snapshot is delivered before returning.
        """
        pass
