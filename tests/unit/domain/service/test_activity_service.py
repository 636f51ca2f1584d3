"""Unit tests for ActivityService."""

import asyncio

import pytest

from huddle.domain.error import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PartialFailureError,
    ValidationError,
)
from huddle.domain.model import JoinRequest
from huddle.domain.repository import ChatRepository
from huddle.domain.service import (
    ActivityService,
    ChatService,
    MembershipService,
    validate_activity_fields,
)
from huddle.domain.value import ActivityFields, ActivityId, RequestAction
from huddle.persistence.error import StoreError
from huddle.persistence.store import Collection
from tests.conftest import ALICE, BOB, HOST, accepted_member, host_activity
from tests.fakes import FlakyEntityStore, Services
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestValidateActivityFields:
    """Tests for field validation."""

    def test_trims_and_clears_blank_fields(self):
        valid = validate_activity_fields(
            ActivityFields(title="  Board Games ", description="   ", image_url="")
        )
        assert valid.title == "Board Games"
        assert valid.description is None
        assert valid.image_url is None

    @pytest.mark.parametrize("title", ["", "   "])
    def test_title_required(self, title):
        with pytest.raises(ValidationError, match="Title is required"):
            validate_activity_fields(ActivityFields(title=title))

    def test_title_limit(self):
        validate_activity_fields(ActivityFields(title="x" * 100))
        with pytest.raises(ValidationError, match="Title"):
            validate_activity_fields(ActivityFields(title="x" * 101))

    def test_description_limit(self):
        validate_activity_fields(ActivityFields(title="t", description="x" * 500))
        with pytest.raises(ValidationError, match="Description"):
            validate_activity_fields(ActivityFields(title="t", description="x" * 501))

    def test_max_participants_positive(self):
        with pytest.raises(ValidationError, match="Max participants"):
            validate_activity_fields(ActivityFields(title="t", max_participants=0))


class TestCreateActivity:
    """Tests for create_activity method."""

    @pytest.mark.asyncio
    async def test_creates_activity_and_chat(self, unit_env):
        """The chat shares the activity ID and starts with the host only."""
        # Arrange
        activities = await unit_env.get(ActivityService)

        # Act
        activity, chat = await host_activity(activities)

        # Assert
        assert activity.host_id == HOST
        assert activity.title == "Board Games"
        assert activity.is_active
        assert activity.max_participants == 10
        assert chat.id == activity.id
        assert chat.host_id == HOST
        assert chat.participants == {HOST}

    @pytest.mark.asyncio
    async def test_keeps_requested_limit(self, unit_env):
        activities = await unit_env.get(ActivityService)

        activity, _ = await activities.create_activity(
            HOST, ActivityFields(title="Chess", max_participants=2)
        )

        assert activity.max_participants == 2

    @pytest.mark.asyncio
    async def test_invalid_fields_create_nothing(self):
        services = Services(FlakyEntityStore())

        with pytest.raises(ValidationError):
            await services.activities.create_activity(HOST, ActivityFields(title=" "))

        assert services.store.count(Collection.ACTIVITIES) == 0

    @pytest.mark.asyncio
    async def test_failed_chat_removes_activity(self):
        """No activity is left without a chat."""
        # Arrange
        store = FlakyEntityStore()
        services = Services(store)
        store.fail("create", Collection.CHATS)

        # Act
        with pytest.raises(PartialFailureError) as exc_info:
            await host_activity(services.activities)

        # Assert
        assert exc_info.value.step == "create_chat"
        assert store.count(Collection.ACTIVITIES) == 0
        assert store.count(Collection.CHATS) == 0

    @pytest.mark.asyncio
    async def test_failed_cleanup_is_reported(self):
        store = FlakyEntityStore()
        services = Services(store)
        store.fail("create", Collection.CHATS)
        store.fail("delete", Collection.ACTIVITIES)

        with pytest.raises(PartialFailureError) as exc_info:
            await host_activity(services.activities)

        assert exc_info.value.step == "delete_activity"
        assert store.count(Collection.ACTIVITIES) == 1

    @pytest.mark.asyncio
    async def test_list_hosted_activities(self, unit_env):
        activities = await unit_env.get(ActivityService)
        first, _ = await host_activity(activities, title="Chess")
        second, _ = await host_activity(activities, title="Hiking")
        await host_activity(activities, host_id=ALICE, title="Running")

        hosted = await activities.list_hosted_activities(HOST)

        assert [a.id for a in hosted] == [first.id, second.id]


class TestEditActivity:
    """Tests for edit_activity method."""

    @pytest.mark.asyncio
    async def test_host_edits(self, unit_env):
        activities = await unit_env.get(ActivityService)
        activity, _ = await host_activity(activities)

        updated = await activities.edit_activity(
            activity.id,
            HOST,
            ActivityFields(title=" Board Games Night ", description=""),
        )

        assert updated.title == "Board Games Night"
        assert updated.description is None
        assert updated.host_id == HOST
        assert updated.updated_at >= activity.updated_at

    @pytest.mark.asyncio
    async def test_non_host_cannot_edit(self, unit_env):
        activities = await unit_env.get(ActivityService)
        membership = await unit_env.get(MembershipService)
        activity, _ = await host_activity(activities)
        await accepted_member(membership, activity, ALICE)

        with pytest.raises(ForbiddenError):
            await activities.edit_activity(
                activity.id, ALICE, ActivityFields(title="Mine now")
            )

        assert (await activities.get_activity(activity.id)).title == "Board Games"

    @pytest.mark.asyncio
    async def test_unknown_activity(self, unit_env):
        activities = await unit_env.get(ActivityService)

        with pytest.raises(NotFoundError):
            await activities.edit_activity(
                ActivityId("missing"), HOST, ActivityFields(title="x")
            )


class TestEndActivity:
    """Tests for end_activity method."""

    @pytest.mark.asyncio
    async def test_cascade_removes_everything(self, unit_env):
        """Requests, messages, chat and activity are all deleted."""
        # Arrange
        activities = await unit_env.get(ActivityService)
        membership = await unit_env.get(MembershipService)
        chats = await unit_env.get(ChatService)
        chat_repo = await unit_env.get(ChatRepository)
        activity, chat = await host_activity(activities)
        await accepted_member(membership, activity, ALICE)
        await membership.request_to_join(activity.id, BOB)
        await chats.send_message(chat.id, HOST, "Welcome")
        await chats.send_message(chat.id, ALICE, "Thanks")

        # Act
        report = await activities.end_activity(activity.id, HOST)

        # Assert
        assert not report.already_ended
        assert report.join_requests_deleted == 2
        assert report.messages_deleted == 2
        assert report.chat_deleted
        assert report.activity_deleted
        assert report.completed_steps == [
            "mark_ended",
            "delete_join_requests",
            "delete_messages",
            "delete_chat",
            "delete_activity",
        ]
        assert await chat_repo.find_by_id(chat.id) is None
        assert await membership.get_request(activity.id, ALICE) is None
        with pytest.raises(NotFoundError):
            await activities.get_activity(activity.id)

    @pytest.mark.asyncio
    async def test_non_host_cannot_end(self, unit_env):
        activities = await unit_env.get(ActivityService)
        activity, _ = await host_activity(activities)

        with pytest.raises(ForbiddenError):
            await activities.end_activity(activity.id, ALICE)

        assert (await activities.get_activity(activity.id)).is_active

    @pytest.mark.asyncio
    async def test_ending_twice_reports_already_ended(self, unit_env):
        activities = await unit_env.get(ActivityService)
        activity, _ = await host_activity(activities)
        await activities.end_activity(activity.id, HOST)

        report = await activities.end_activity(activity.id, HOST)

        assert report.already_ended
        assert report.completed_steps == [
            "delete_join_requests",
            "delete_messages",
            "delete_chat",
            "delete_activity",
        ]
        assert not report.chat_deleted
        assert not report.activity_deleted

    @pytest.mark.asyncio
    async def test_rerun_finishes_interrupted_cascade(self):
        """A failed step leaves an ended activity that a rerun cleans up."""
        # Arrange
        store = FlakyEntityStore()
        services = Services(store)
        activity, chat = await host_activity(services.activities)
        await accepted_member(services.membership, activity, ALICE)
        await services.chats.send_message(chat.id, ALICE, "See you there")
        store.fail("delete", Collection.CHATS)

        # Act
        with pytest.raises(PartialFailureError) as exc_info:
            await services.activities.end_activity(activity.id, HOST)

        # Assert
        assert exc_info.value.step == "delete_chat"
        ended = await services.activities.get_activity(activity.id)
        assert not ended.is_active
        assert store.count(Collection.JOIN_REQUESTS) == 0
        assert store.count(Collection.MESSAGES) == 0

        report = await services.activities.end_activity(activity.id, HOST)

        assert report.already_ended
        assert report.join_requests_deleted == 0
        assert report.messages_deleted == 0
        assert report.chat_deleted
        assert report.activity_deleted
        assert store.count(Collection.CHATS) == 0
        assert store.count(Collection.ACTIVITIES) == 0

    @pytest.mark.asyncio
    async def test_ended_activity_refuses_joins_and_decisions(self):
        """Between marking and deletion nothing new gets in."""
        store = FlakyEntityStore()
        services = Services(store)
        activity, chat = await host_activity(services.activities)
        pending = await services.membership.request_to_join(activity.id, ALICE)
        await accepted_member(services.membership, activity, BOB)
        store.fail("delete", Collection.JOIN_REQUESTS)

        with pytest.raises(PartialFailureError):
            await services.activities.end_activity(activity.id, HOST)

        with pytest.raises(InvalidTransitionError):
            await services.membership.request_to_join(activity.id, "dave")
        with pytest.raises(InvalidTransitionError):
            await services.membership.decide(pending.id, RequestAction.ACCEPT, HOST)
        with pytest.raises(InvalidTransitionError):
            await services.chats.send_message(chat.id, BOB, "Still here?")

    @pytest.mark.asyncio
    async def test_failed_mark_is_not_partial(self):
        """Nothing was changed, so the store error propagates as is."""
        store = FlakyEntityStore()
        services = Services(store)
        activity, _ = await host_activity(services.activities)
        store.fail("update", Collection.ACTIVITIES)

        with pytest.raises(StoreError):
            await services.activities.end_activity(activity.id, HOST)

        assert (await services.activities.get_activity(activity.id)).is_active


class TestEndActivityRaces:
    """Writes that land while an activity is being ended."""

    @pytest.mark.asyncio
    async def test_join_during_cascade_is_withdrawn(self):
        """A join whose write lands after the cascade leaves nothing behind."""
        # Arrange
        store = FlakyEntityStore()
        services = Services(store)
        activity, _ = await host_activity(services.activities)
        store.delay("create", Collection.JOIN_REQUESTS)

        # Act
        joined, report = await asyncio.gather(
            services.membership.request_to_join(activity.id, BOB),
            services.activities.end_activity(activity.id, HOST),
            return_exceptions=True,
        )

        # Assert
        assert isinstance(joined, InvalidTransitionError)
        assert report.activity_deleted
        assert store.count(Collection.JOIN_REQUESTS) == 0
        assert store.count(Collection.ACTIVITIES) == 0

    @pytest.mark.asyncio
    async def test_message_during_cascade_is_withdrawn(self):
        store = FlakyEntityStore()
        services = Services(store)
        activity, chat = await host_activity(services.activities)
        await accepted_member(services.membership, activity, ALICE)
        store.delay("create", Collection.MESSAGES)

        sent, report = await asyncio.gather(
            services.chats.send_message(chat.id, ALICE, "On my way"),
            services.activities.end_activity(activity.id, HOST),
            return_exceptions=True,
        )

        assert isinstance(sent, InvalidTransitionError)
        assert report.chat_deleted
        assert store.count(Collection.MESSAGES) == 0

    @pytest.mark.asyncio
    async def test_rerun_sweeps_request_left_by_failed_withdrawal(self):
        """Once the activity is gone a rerun still deletes its leftovers."""
        # Arrange
        store = FlakyEntityStore()
        services = Services(store)
        activity, _ = await host_activity(services.activities)
        store.delay("create", Collection.JOIN_REQUESTS)
        store.fail("delete", Collection.JOIN_REQUESTS)

        joined, _ = await asyncio.gather(
            services.membership.request_to_join(activity.id, BOB),
            services.activities.end_activity(activity.id, HOST),
            return_exceptions=True,
        )
        assert isinstance(joined, StoreError)
        assert store.count(Collection.JOIN_REQUESTS) == 1

        # Act
        report = await services.activities.end_activity(activity.id, HOST)

        # Assert
        assert report.already_ended
        assert report.join_requests_deleted == 1
        assert store.count(Collection.JOIN_REQUESTS) == 0

    @pytest.mark.asyncio
    async def test_sweep_checks_chat_host_when_activity_is_gone(self):
        store = FlakyEntityStore()
        services = Services(store)
        activity, _ = await host_activity(services.activities)
        await store.delete(Collection.ACTIVITIES, activity.id)

        with pytest.raises(ForbiddenError):
            await services.activities.end_activity(activity.id, ALICE)

        report = await services.activities.end_activity(activity.id, HOST)
        assert report.already_ended
        assert report.chat_deleted
        assert store.count(Collection.CHATS) == 0

    @pytest.mark.asyncio
    async def test_join_before_mark_is_swept(self):
        """A join that sees the activity active is removed by the cascade."""
        store = FlakyEntityStore()
        services = Services(store)
        activity, _ = await host_activity(services.activities)

        joined = await services.membership.request_to_join(activity.id, BOB)
        report = await services.activities.end_activity(activity.id, HOST)

        assert isinstance(joined, JoinRequest)
        assert report.join_requests_deleted == 1
        assert store.count(Collection.JOIN_REQUESTS) == 0
