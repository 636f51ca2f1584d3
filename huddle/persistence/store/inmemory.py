"""In-memory entity store for tests and local development."""

import copy
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence
from uuid import uuid4

from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.persistence.error import (
    ConflictError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from huddle.persistence.store.base import (
    Collection,
    Document,
    EntityStore,
    Where,
    matches,
)
from huddle.persistence.store.feed import ChangeFeed


class InMemoryEntityStore(EntityStore):
    """In-memory implementation of EntityStore.

    Every operation completes without yielding to the event loop before its
    change notification, so each write is atomic with respect to other
    coroutines. Records are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self._last_timestamp: datetime | None = None
        self.feed = ChangeFeed()

    def _timestamp(self) -> datetime:
        """Strictly increasing server timestamp."""
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _records(self, collection: Collection) -> dict[str, Document]:
        return self._collections[collection.value]

    def _select(
        self, collection: Collection, where: Where | None, order_by: Sequence[str]
    ) -> list[Document]:
        found = [
            copy.deepcopy(doc)
            for doc in self._records(collection).values()
            if matches(doc, where)
        ]
        if order_by:
            found.sort(key=lambda doc: tuple(doc.get(field) for field in order_by))
        return found

    async def get(self, collection: Collection, record_id: str) -> Document | None:
        """Fetch one record."""
        doc = self._records(collection).get(record_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def get_many(
        self, collection: Collection, record_ids: Sequence[str]
    ) -> dict[str, Document]:
        """Fetch several records."""
        records = self._records(collection)
        return {
            record_id: copy.deepcopy(records[record_id])
            for record_id in record_ids
            if record_id in records
        }

    async def query(
        self,
        collection: Collection,
        where: Where | None = None,
        order_by: Sequence[str] = (),
    ) -> list[Document]:
        """Fetch records matching all equality filters."""
        return self._select(collection, where, order_by)

    async def create(
        self,
        collection: Collection,
        fields: Document,
        record_id: str | None = None,
    ) -> Document:
        """Create a record, assigning id and created_at."""
        records = self._records(collection)
        record_id = record_id or uuid4().hex
        if record_id in records:
            raise DuplicateRecordError(collection.value, record_id)

        doc = copy.deepcopy(fields)
        doc["id"] = record_id
        doc["created_at"] = self._timestamp()
        records[record_id] = doc

        await self.feed.publish(collection.value)
        return copy.deepcopy(doc)

    async def update(
        self,
        collection: Collection,
        record_id: str,
        patch: Document,
        when: Where | None = None,
    ) -> Document:
        """Merge a patch, optionally conditional on the current state."""
        records = self._records(collection)
        doc = records.get(record_id)
        if doc is None:
            raise RecordNotFoundError(collection.value, record_id)
        if not matches(doc, when):
            raise ConflictError(collection.value, record_id)

        updated = {**doc, **copy.deepcopy(patch)}
        updated["id"] = doc["id"]
        updated["created_at"] = doc["created_at"]
        records[record_id] = updated

        await self.feed.publish(collection.value)
        return copy.deepcopy(updated)

    async def add_to_set(
        self, collection: Collection, record_id: str, field: str, value: Any
    ) -> Document:
        """Add a value to an array field unless already present."""
        records = self._records(collection)
        doc = records.get(record_id)
        if doc is None:
            raise RecordNotFoundError(collection.value, record_id)

        members = list(doc.get(field) or [])
        if value in members:
            return copy.deepcopy(doc)
        members.append(value)
        records[record_id] = {**doc, field: members}

        await self.feed.publish(collection.value)
        return copy.deepcopy(records[record_id])

    async def delete(self, collection: Collection, record_id: str) -> None:
        """Hard-delete a record."""
        records = self._records(collection)
        if record_id not in records:
            raise RecordNotFoundError(collection.value, record_id)
        del records[record_id]

        await self.feed.publish(collection.value)

    async def subscribe(
        self,
        collection: Collection,
        target: str | Where,
        on_change: SnapshotObserver,
        order_by: Sequence[str] = (),
    ) -> Subscription:
        """Open a live subscription on a record or a predicate."""
        if isinstance(target, str):
            record_id = target

            async def fetch():
                return await self.get(collection, record_id)

        else:
            where = dict(target)

            async def fetch():
                return self._select(collection, where, order_by)

        return await self.feed.open(collection.value, fetch, on_change)

    def count(self, collection: Collection) -> int:
        """Number of records in a collection."""
        return len(self._records(collection))
