"""Unit tests for the entity store repositories."""

from datetime import datetime, timedelta, timezone

import pytest

from huddle.domain.error import (
    DuplicateRequestError,
    InvalidTransitionError,
    NotFoundError,
)
from huddle.domain.value import ActivityId, ChatId, RequestStatus, UserId
from huddle.persistence.repository import (
    StoreActivityRepository,
    StoreChatRepository,
    StoreJoinRequestRepository,
    join_request_id,
)
from huddle.persistence.store import InMemoryEntityStore
from tests.conftest import ALICE, BOB, HOST


@pytest.fixture
def store():
    return InMemoryEntityStore()


def test_join_request_id_is_deterministic():
    first = join_request_id(ActivityId("a1"), ALICE)

    assert first == join_request_id(ActivityId("a1"), ALICE)
    assert first != join_request_id(ActivityId("a1"), BOB)
    assert first != join_request_id(ActivityId("a2"), ALICE)


class TestJoinRequestRepository:
    """Tests for StoreJoinRequestRepository."""

    @pytest.mark.asyncio
    async def test_create_pending_once(self, store):
        repo = StoreJoinRequestRepository(store)

        request = await repo.create_pending(ActivityId("a1"), ALICE)

        assert request.id == join_request_id(ActivityId("a1"), ALICE)
        with pytest.raises(DuplicateRequestError):
            await repo.create_pending(ActivityId("a1"), ALICE)

    @pytest.mark.asyncio
    async def test_transition_only_from_pending(self, store):
        repo = StoreJoinRequestRepository(store)
        request = await repo.create_pending(ActivityId("a1"), ALICE)
        now = datetime.now(timezone.utc)

        accepted = await repo.transition(request.id, RequestStatus.ACCEPTED, now)

        assert accepted.status == RequestStatus.ACCEPTED
        assert accepted.decided_at == now
        with pytest.raises(InvalidTransitionError):
            await repo.transition(request.id, RequestStatus.REJECTED, now)

    @pytest.mark.asyncio
    async def test_transition_missing_request(self, store):
        repo = StoreJoinRequestRepository(store)

        with pytest.raises(NotFoundError):
            await repo.transition(
                join_request_id(ActivityId("a1"), ALICE),
                RequestStatus.ACCEPTED,
                datetime.now(timezone.utc),
            )

    @pytest.mark.asyncio
    async def test_find_by_activity_filters_status(self, store):
        repo = StoreJoinRequestRepository(store)
        alice = await repo.create_pending(ActivityId("a1"), ALICE)
        await repo.create_pending(ActivityId("a1"), BOB)
        await repo.create_pending(ActivityId("a2"), ALICE)
        await repo.transition(
            alice.id, RequestStatus.ACCEPTED, datetime.now(timezone.utc)
        )

        everyone = await repo.find_by_activity(ActivityId("a1"))
        accepted = await repo.find_by_activity(ActivityId("a1"), RequestStatus.ACCEPTED)

        assert [r.user_id for r in everyone] == [ALICE, BOB]
        assert [r.user_id for r in accepted] == [ALICE]

    @pytest.mark.asyncio
    async def test_delete_reports_missing(self, store):
        repo = StoreJoinRequestRepository(store)
        request = await repo.create_pending(ActivityId("a1"), ALICE)

        assert await repo.delete(request.id)
        assert not await repo.delete(request.id)


class TestChatRepository:
    """Tests for StoreChatRepository."""

    @pytest.mark.asyncio
    async def test_chat_keyed_by_activity(self, store):
        repo = StoreChatRepository(store)

        chat = await repo.create(ActivityId("a1"), HOST)

        assert chat.id == "a1"
        assert chat.participants == {HOST}

    @pytest.mark.asyncio
    async def test_add_participant_to_missing_chat(self, store):
        repo = StoreChatRepository(store)

        with pytest.raises(NotFoundError):
            await repo.add_participant(ChatId("missing"), ALICE)


class TestActivityRepository:
    """Tests for StoreActivityRepository."""

    @pytest.mark.asyncio
    async def test_new_activity_reports_creation_as_update(self, store):
        repo = StoreActivityRepository(store)

        activity = await repo.create(HOST, "Board Games", None, None, 10)

        assert activity.updated_at == activity.created_at
        assert activity.ended_at is None

    @pytest.mark.asyncio
    async def test_mark_ended_keeps_first_timestamp(self, store):
        repo = StoreActivityRepository(store)
        activity = await repo.create(HOST, "Board Games", None, None, 10)
        first = datetime.now(timezone.utc)

        await repo.mark_ended(activity.id, first)
        again = await repo.mark_ended(activity.id, first + timedelta(minutes=5))

        assert again.ended_at == first
        assert await repo.find_active_by_host(HOST) == []

    @pytest.mark.asyncio
    async def test_find_many_skips_missing(self, store):
        repo = StoreActivityRepository(store)
        activity = await repo.create(UserId("h"), "Board Games", None, None, 10)

        found = await repo.find_many([activity.id, ActivityId("missing")])

        assert list(found) == [activity.id]
