"""Chat access domain service."""

from typing import Awaitable, Callable, Optional

import logfire

from huddle.domain.error import ForbiddenError, NotFoundError
from huddle.domain.model import Activity, Chat, JoinRequest
from huddle.domain.repository import (
    ActivityRepository,
    ChatRepository,
    JoinRequestRepository,
    Subscription,
    SubscriptionGroup,
)
from huddle.domain.value import ActivityId, ChatId, UserId

from .base import Service


class AccessService(Service):
    """Derives who may read and write an activity's chat.

    Access is computed from the activity's host and the actor's join
    request every time it is asked for; it is never stored. The chat's
    participant set only mirrors accepted requests and is not consulted.
    """

    def __init__(
        self,
        activity_repository: ActivityRepository,
        join_request_repository: JoinRequestRepository,
        chat_repository: ChatRepository,
    ) -> None:
        """Initialize access service.

        Args:
            activity_repository: Activity repository
            join_request_repository: Join request repository
            chat_repository: Chat repository
        """
        self.activity_repository = activity_repository
        self.join_request_repository = join_request_repository
        self.chat_repository = chat_repository

    @staticmethod
    def can_access_chat(
        activity: Activity, request: Optional[JoinRequest], actor_id: UserId
    ) -> bool:
        """Whether the actor may read and post in the activity's chat.

        Args:
            activity: The activity
            request: The actor's join request for this activity, if any
            actor_id: User asking for access

        Returns:
            True for the host, or for a requester whose request on this
            activity was accepted
        """
        if activity.is_host(actor_id):
            return True
        if request is None:
            return False
        return (
            request.activity_id == activity.id
            and request.user_id == actor_id
            and request.is_accepted
        )

    @staticmethod
    def participant_count(chat: Optional[Chat]) -> int:
        """Number of chat participants, host included. 0 for a missing chat."""
        return chat.participant_count if chat else 0

    async def resolve_chat_access(
        self, activity_id: ActivityId, actor_id: UserId
    ) -> bool:
        """Load the activity and the actor's request and decide access.

        Raises:
            NotFoundError: If the activity does not exist
        """
        with logfire.span(
            "access_service.resolve_chat_access",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            activity = await self.activity_repository.find_by_id(activity_id)
            if not activity:
                raise NotFoundError("Activity", activity_id)
            return await self.access_for(activity, actor_id)

    async def access_for(self, activity: Activity, actor_id: UserId) -> bool:
        """Decide access for an already loaded activity."""
        if activity.is_host(actor_id):
            return True
        request = await self.join_request_repository.find_by_activity_and_user(
            activity.id, actor_id
        )
        return self.can_access_chat(activity, request, actor_id)

    async def require_chat_access(
        self, chat_id: ChatId, actor_id: UserId, action: str = "read"
    ) -> Activity:
        """Load the activity behind a chat and check the actor's access.

        Args:
            chat_id: Chat ID (equal to the activity ID)
            actor_id: User asking for access
            action: Verb reported in the error

        Returns:
            The chat's activity

        Raises:
            NotFoundError: If the activity does not exist
            ForbiddenError: If the actor may not access the chat
        """
        activity = await self.activity_repository.find_by_id(ActivityId(chat_id))
        if not activity:
            raise NotFoundError("Chat", chat_id)
        if not await self.access_for(activity, actor_id):
            logfire.warn("Chat access denied", chat_id=chat_id, actor_id=actor_id)
            raise ForbiddenError(action, "chat", chat_id, actor_id)
        return activity

    async def is_active(self, activity_id: ActivityId) -> bool:
        """Re-read an activity. False once it is ended or deleted."""
        activity = await self.activity_repository.find_by_id(activity_id)
        return activity is not None and activity.is_active

    async def watch_participant_count(
        self, chat_id: ChatId, on_change: Callable[[int], Awaitable[None]]
    ) -> Subscription:
        """Live participant count of a chat.

        The current count is delivered before this returns, then again on
        every change to the chat; 0 once the chat is deleted.
        """

        async def deliver(chat: Optional[Chat]) -> None:
            await on_change(self.participant_count(chat))

        return await self.chat_repository.watch(chat_id, deliver)

    async def watch_chat_access(
        self,
        activity_id: ActivityId,
        actor_id: UserId,
        on_change: Callable[[bool], Awaitable[None]],
    ) -> SubscriptionGroup:
        """Live access flag for an actor.

        Re-derived whenever the activity or its join requests change.
        Deliveries that would repeat the previous value are skipped.
        """
        state: dict = {"activity": None, "requests": [], "last": None, "seen": set()}

        async def publish() -> None:
            # Wait for the first snapshot of both feeds
            if len(state["seen"]) < 2:
                return
            activity = state["activity"]
            if activity is None:
                allowed = False
            else:
                own = next(
                    (r for r in state["requests"] if r.user_id == actor_id), None
                )
                allowed = self.can_access_chat(activity, own, actor_id)
            if allowed != state["last"]:
                state["last"] = allowed
                await on_change(allowed)

        async def on_activity(activity: Optional[Activity]) -> None:
            state["activity"] = activity
            state["seen"].add("activity")
            await publish()

        async def on_requests(requests: list[JoinRequest]) -> None:
            state["requests"] = requests
            state["seen"].add("requests")
            await publish()

        group = SubscriptionGroup()
        group.add(
            await self.join_request_repository.watch_activity(activity_id, on_requests)
        )
        group.add(await self.activity_repository.watch(activity_id, on_activity))
        return group
