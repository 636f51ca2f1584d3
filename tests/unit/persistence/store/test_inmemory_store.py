"""Unit tests for InMemoryEntityStore and its change feed."""

import asyncio

import pytest

from huddle.domain.repository import SubscriptionGroup
from huddle.persistence.error import (
    ConflictError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from huddle.persistence.store import Collection, InMemoryEntityStore


@pytest.fixture
def store():
    return InMemoryEntityStore()


class TestWrites:
    """Tests for create, update, add_to_set and delete."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, store):
        first = await store.create(Collection.ACTIVITIES, {"title": "a"})
        second = await store.create(Collection.ACTIVITIES, {"title": "b"})

        assert first["id"] != second["id"]
        assert first["created_at"] < second["created_at"]
        assert await store.get(Collection.ACTIVITIES, first["id"]) == first

    @pytest.mark.asyncio
    async def test_explicit_id_is_create_if_absent(self, store):
        await store.create(Collection.CHATS, {"host_id": "h"}, record_id="a1")

        with pytest.raises(DuplicateRecordError):
            await store.create(Collection.CHATS, {"host_id": "x"}, record_id="a1")

        assert (await store.get(Collection.CHATS, "a1"))["host_id"] == "h"

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, store):
        doc = await store.create(Collection.CHATS, {"participants": ["h"]})
        doc["participants"].append("intruder")

        stored = await store.get(Collection.CHATS, doc["id"])
        assert stored["participants"] == ["h"]

    @pytest.mark.asyncio
    async def test_conditional_update(self, store):
        doc = await store.create(Collection.JOIN_REQUESTS, {"status": "pending"})

        updated = await store.update(
            Collection.JOIN_REQUESTS,
            doc["id"],
            {"status": "accepted", "id": "forged"},
            when={"status": "pending"},
        )
        assert updated["status"] == "accepted"
        assert updated["id"] == doc["id"]
        assert updated["created_at"] == doc["created_at"]

        with pytest.raises(ConflictError):
            await store.update(
                Collection.JOIN_REQUESTS,
                doc["id"],
                {"status": "rejected"},
                when={"status": "pending"},
            )

    @pytest.mark.asyncio
    async def test_update_missing_record(self, store):
        with pytest.raises(RecordNotFoundError):
            await store.update(Collection.ACTIVITIES, "missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_add_to_set_is_idempotent(self, store):
        doc = await store.create(Collection.CHATS, {"participants": ["h"]})

        await store.add_to_set(Collection.CHATS, doc["id"], "participants", "a")
        result = await store.add_to_set(
            Collection.CHATS, doc["id"], "participants", "a"
        )

        assert result["participants"] == ["h", "a"]

    @pytest.mark.asyncio
    async def test_concurrent_add_to_set_loses_nothing(self, store):
        doc = await store.create(Collection.CHATS, {"participants": ["h"]})
        users = [f"user-{i}" for i in range(20)]

        await asyncio.gather(
            *(
                store.add_to_set(Collection.CHATS, doc["id"], "participants", u)
                for u in users
            )
        )

        stored = await store.get(Collection.CHATS, doc["id"])
        assert set(stored["participants"]) == {"h", *users}

    @pytest.mark.asyncio
    async def test_delete(self, store):
        doc = await store.create(Collection.MESSAGES, {"message": "hi"})

        await store.delete(Collection.MESSAGES, doc["id"])

        assert await store.get(Collection.MESSAGES, doc["id"]) is None
        with pytest.raises(RecordNotFoundError):
            await store.delete(Collection.MESSAGES, doc["id"])


class TestQueries:
    """Tests for query and get_many."""

    @pytest.mark.asyncio
    async def test_query_filters_and_orders(self, store):
        for chat, text in [("c1", "one"), ("c2", "other"), ("c1", "two")]:
            await store.create(Collection.MESSAGES, {"chat_id": chat, "message": text})

        found = await store.query(
            Collection.MESSAGES, where={"chat_id": "c1"}, order_by=("created_at", "id")
        )

        assert [d["message"] for d in found] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_none_matches_missing_field(self, store):
        await store.create(Collection.ACTIVITIES, {"host_id": "h"})
        await store.create(Collection.ACTIVITIES, {"host_id": "h", "ended_at": "t"})

        found = await store.query(
            Collection.ACTIVITIES, where={"host_id": "h", "ended_at": None}
        )

        assert len(found) == 1

    @pytest.mark.asyncio
    async def test_get_many_skips_missing(self, store):
        await store.create(Collection.PROFILES, {"username": "ann"}, record_id="u1")

        found = await store.get_many(Collection.PROFILES, ["u1", "u2"])

        assert list(found) == ["u1"]


class TestSubscriptions:
    """Tests for live subscriptions."""

    @pytest.mark.asyncio
    async def test_initial_snapshot_then_changes(self, store):
        snapshots = []

        async def on_change(docs):
            snapshots.append([d["message"] for d in docs])

        await store.create(Collection.MESSAGES, {"chat_id": "c1", "message": "old"})
        subscription = await store.subscribe(
            Collection.MESSAGES,
            {"chat_id": "c1"},
            on_change,
            order_by=("created_at", "id"),
        )
        await store.create(Collection.MESSAGES, {"chat_id": "c1", "message": "new"})
        await store.create(Collection.MESSAGES, {"chat_id": "c2", "message": "x"})

        assert snapshots[0] == ["old"]
        assert snapshots[-1] == ["old", "new"]
        assert subscription.active

    @pytest.mark.asyncio
    async def test_record_subscription_sees_deletion(self, store):
        snapshots = []

        async def on_change(doc):
            snapshots.append(doc["title"] if doc else None)

        doc = await store.create(Collection.ACTIVITIES, {"title": "a"})
        await store.subscribe(Collection.ACTIVITIES, doc["id"], on_change)
        await store.update(Collection.ACTIVITIES, doc["id"], {"title": "b"})
        await store.delete(Collection.ACTIVITIES, doc["id"])

        assert snapshots == ["a", "b", None]

    @pytest.mark.asyncio
    async def test_cancel_stops_delivery_and_is_idempotent(self, store):
        snapshots = []

        async def on_change(docs):
            snapshots.append(len(docs))

        subscription = await store.subscribe(Collection.MESSAGES, {}, on_change)

        assert subscription.cancel() is True
        assert subscription.cancel() is False
        await store.create(Collection.MESSAGES, {"message": "hi"})

        assert snapshots == [0]
        assert not subscription.active
        assert store.feed.open_count() == 0

    @pytest.mark.asyncio
    async def test_failing_observer_does_not_fail_writer(self, store):
        delivered = []

        async def broken(docs):
            if docs:
                raise RuntimeError("observer exploded")

        async def healthy(docs):
            delivered.append(len(docs))

        await store.subscribe(Collection.MESSAGES, {}, broken)
        await store.subscribe(Collection.MESSAGES, {}, healthy)

        doc = await store.create(Collection.MESSAGES, {"message": "hi"})

        assert doc["message"] == "hi"
        assert delivered == [0, 1]

    @pytest.mark.asyncio
    async def test_group_cancels_all(self, store):
        async def on_change(docs):
            pass

        group = SubscriptionGroup()
        first = group.add(await store.subscribe(Collection.MESSAGES, {}, on_change))
        second = group.add(await store.subscribe(Collection.CHATS, {}, on_change))

        assert group.cancel() is True
        assert group.cancel() is False
        assert not first.active
        assert not second.active

        late = group.add(await store.subscribe(Collection.CHATS, {}, on_change))
        assert not late.active
        assert store.feed.open_count() == 0

    @pytest.mark.asyncio
    async def test_group_as_context_manager(self, store):
        async def on_change(docs):
            pass

        async with SubscriptionGroup() as group:
            subscription = group.add(
                await store.subscribe(Collection.MESSAGES, {}, on_change)
            )
            assert subscription.active

        assert not subscription.active
        assert not group.active
