"""PostgreSQL implementation of the entity store."""

from typing import Any, Sequence
from uuid import uuid4

import logfire
from sqlalchemy import and_, case, delete, func, literal, select, update
from sqlalchemy.dialects.postgresql import JSONB, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.persistence.error import (
    ConflictError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from huddle.persistence.store.base import Collection, Document, EntityStore, Where
from huddle.persistence.store.feed import ChangeFeed
from huddle.persistence.tables import documents_table

# Columns stored outside the JSONB payload
_STORE_COLUMNS = ("id", "created_at")


def _row_to_document(row: Any) -> Document:
    """Merge the JSONB payload with the store-owned columns."""
    return {**row["data"], "id": row["id"], "created_at": row["created_at"]}


def _payload(fields: Document) -> Document:
    return {k: v for k, v in fields.items() if k not in _STORE_COLUMNS}


class PostgresEntityStore(EntityStore):
    """PostgreSQL implementation of EntityStore.

    Each operation runs in its own short transaction. Conditional updates
    and set-union are single UPDATE statements, so they are atomic under
    the row lock. Change notifications are delivered to subscriptions
    opened on this store instance after the transaction commits.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory
        self.feed = ChangeFeed()

    def _key(self, collection: Collection, record_id: str):
        return and_(
            documents_table.c.collection == collection.value,
            documents_table.c.id == record_id,
        )

    def _order_clause(self, order_by: Sequence[str]) -> list:
        clauses = []
        for field in order_by:
            if field in _STORE_COLUMNS:
                clauses.append(documents_table.c[field])
            else:
                clauses.append(documents_table.c.data[field].astext)
        return clauses

    async def _exists(
        self, session: AsyncSession, collection: Collection, record_id: str
    ) -> bool:
        stmt = select(documents_table.c.id).where(self._key(collection, record_id))
        result = await session.execute(stmt)
        return result.first() is not None

    async def get(self, collection: Collection, record_id: str) -> Document | None:
        """Fetch one record."""
        async with self.session_factory() as session:
            stmt = select(documents_table).where(self._key(collection, record_id))
            result = await session.execute(stmt)
            row = result.mappings().first()
            return _row_to_document(row) if row else None

    async def get_many(
        self, collection: Collection, record_ids: Sequence[str]
    ) -> dict[str, Document]:
        """Fetch several records with a single IN query."""
        if not record_ids:
            return {}
        async with self.session_factory() as session:
            stmt = select(documents_table).where(
                and_(
                    documents_table.c.collection == collection.value,
                    documents_table.c.id.in_(list(record_ids)),
                )
            )
            result = await session.execute(stmt)
            return {
                row["id"]: _row_to_document(row) for row in result.mappings().all()
            }

    async def query(
        self,
        collection: Collection,
        where: Where | None = None,
        order_by: Sequence[str] = (),
    ) -> list[Document]:
        """Fetch records matching all equality filters (JSONB containment)."""
        async with self.session_factory() as session:
            stmt = select(documents_table).where(
                documents_table.c.collection == collection.value
            )
            if where:
                stmt = stmt.where(documents_table.c.data.contains(dict(where)))
            if order_by:
                stmt = stmt.order_by(*self._order_clause(order_by))
            result = await session.execute(stmt)
            return [_row_to_document(row) for row in result.mappings().all()]

    async def create(
        self,
        collection: Collection,
        fields: Document,
        record_id: str | None = None,
    ) -> Document:
        """Insert a record; explicit IDs use insert-if-absent."""
        record_id = record_id or uuid4().hex
        async with self.session_factory.begin() as session:
            stmt = (
                insert(documents_table)
                .values(
                    collection=collection.value, id=record_id, data=_payload(fields)
                )
                .on_conflict_do_nothing(index_elements=["collection", "id"])
                .returning(*documents_table.c)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                raise DuplicateRecordError(collection.value, record_id)
            doc = _row_to_document(row)

        await self.feed.publish(collection.value)
        return doc

    async def update(
        self,
        collection: Collection,
        record_id: str,
        patch: Document,
        when: Where | None = None,
    ) -> Document:
        """Merge a patch with ``||``, guarded by JSONB containment of ``when``."""
        async with self.session_factory.begin() as session:
            conditions = [self._key(collection, record_id)]
            if when:
                conditions.append(documents_table.c.data.contains(dict(when)))
            stmt = (
                update(documents_table)
                .where(and_(*conditions))
                .values(
                    data=documents_table.c.data.op("||", return_type=JSONB)(
                        literal(_payload(patch), JSONB)
                    )
                )
                .returning(*documents_table.c)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                if await self._exists(session, collection, record_id):
                    logfire.warn(
                        "Conditional update lost",
                        collection=collection.value,
                        record_id=record_id,
                    )
                    raise ConflictError(collection.value, record_id)
                raise RecordNotFoundError(collection.value, record_id)
            doc = _row_to_document(row)

        await self.feed.publish(collection.value)
        return doc

    async def add_to_set(
        self, collection: Collection, record_id: str, field: str, value: Any
    ) -> Document:
        """Union a value into a JSONB array in one UPDATE."""
        current = func.coalesce(
            documents_table.c.data[field], literal([], JSONB), type_=JSONB
        )
        item = func.jsonb_build_array(literal(value, JSONB), type_=JSONB)
        members = case((current.contains(item), current), else_=current.op("||")(item))

        async with self.session_factory.begin() as session:
            stmt = (
                update(documents_table)
                .where(self._key(collection, record_id))
                .values(
                    data=documents_table.c.data.op("||", return_type=JSONB)(
                        func.jsonb_build_object(literal(field), members, type_=JSONB)
                    )
                )
                .returning(*documents_table.c)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                raise RecordNotFoundError(collection.value, record_id)
            doc = _row_to_document(row)

        await self.feed.publish(collection.value)
        return doc

    async def delete(self, collection: Collection, record_id: str) -> None:
        """Hard-delete a record."""
        async with self.session_factory.begin() as session:
            stmt = (
                delete(documents_table)
                .where(self._key(collection, record_id))
                .returning(documents_table.c.id)
            )
            result = await session.execute(stmt)
            if result.first() is None:
                raise RecordNotFoundError(collection.value, record_id)

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
                return await self.query(collection, where, order_by)

        return await self.feed.open(collection.value, fetch, on_change)
