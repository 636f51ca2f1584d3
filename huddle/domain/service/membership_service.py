"""Join request domain service."""

from datetime import datetime, timezone
from typing import Optional

import logfire

from huddle.domain.error import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PartialFailureError,
)
from huddle.domain.model import Activity, Chat, JoinRequest
from huddle.domain.repository import (
    ActivityRepository,
    ChatRepository,
    JoinRequestRepository,
    SnapshotObserver,
    Subscription,
)
from huddle.domain.value import (
    ActivityId,
    ChatId,
    JoinRequestId,
    RequestAction,
    RequestStatus,
    UserId,
)

from .base import Service


class MembershipService(Service):
    """Domain service for join requests and chat membership.

    Preconditions are checked against freshly loaded records and then
    re-validated by the store: a request is created only if absent and
    moves out of PENDING only if it is still pending.
    """

    def __init__(
        self,
        join_request_repository: JoinRequestRepository,
        activity_repository: ActivityRepository,
        chat_repository: ChatRepository,
    ) -> None:
        """Initialize membership service.

        Args:
            join_request_repository: Join request repository
            activity_repository: Activity repository
            chat_repository: Chat repository
        """
        self.join_request_repository = join_request_repository
        self.activity_repository = activity_repository
        self.chat_repository = chat_repository

    async def _get_activity(self, activity_id: ActivityId) -> Activity:
        activity = await self.activity_repository.find_by_id(activity_id)
        if not activity:
            logfire.warn("Activity not found", activity_id=activity_id)
            raise NotFoundError("Activity", activity_id)
        return activity

    def _require_host(
        self, activity: Activity, actor_id: UserId, action: str
    ) -> None:
        if not activity.is_host(actor_id):
            logfire.warn(
                "Host-only operation denied",
                action=action,
                activity_id=activity.id,
                actor_id=actor_id,
            )
            raise ForbiddenError(action, "activity", activity.id, actor_id)

    async def request_to_join(
        self, activity_id: ActivityId, actor_id: UserId
    ) -> JoinRequest:
        """Ask to join an activity.

        Args:
            activity_id: Activity to join
            actor_id: Requesting user

        Returns:
            The new pending request

        Raises:
            NotFoundError: If the activity does not exist
            InvalidTransitionError: If the activity has ended
            ForbiddenError: If the actor hosts the activity
            DuplicateRequestError: If the actor already has a request for it

        The activity is read again after the write; if it ended in between,
        the new request is deleted and InvalidTransitionError is raised.
        """
        with logfire.span(
            "membership_service.request_to_join",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            activity = await self._get_activity(activity_id)
            if not activity.is_active:
                raise InvalidTransitionError(f"Activity {activity_id} has ended")
            if activity.is_host(actor_id):
                logfire.warn(
                    "Host tried to join own activity",
                    activity_id=activity_id,
                    actor_id=actor_id,
                )
                raise ForbiddenError("join", "activity", activity_id, actor_id)

            request = await self.join_request_repository.create_pending(
                activity_id, actor_id
            )
            # Ending marks the activity before deleting its requests, so a
            # request that still sees it active is swept by the cascade
            current = await self.activity_repository.find_by_id(activity_id)
            if not current or not current.is_active:
                await self.join_request_repository.delete(request.id)
                logfire.warn(
                    "Join request withdrawn, activity ended meanwhile",
                    request_id=request.id,
                    activity_id=activity_id,
                )
                raise InvalidTransitionError(f"Activity {activity_id} has ended")

            logfire.info(
                "Join request created",
                request_id=request.id,
                activity_id=activity_id,
                user_id=actor_id,
            )
            return request

    async def decide(
        self, request_id: JoinRequestId, action: RequestAction, actor_id: UserId
    ) -> JoinRequest:
        """Accept or reject a pending join request.

        The status change is a conditional write, so of two concurrent
        decisions on the same request exactly one wins. An accepted
        requester is then added to the chat participants.

        Args:
            request_id: Request to decide
            action: Accept or reject
            actor_id: Deciding user, must host the activity

        Returns:
            The request in its terminal state

        Raises:
            NotFoundError: If the request or its activity does not exist
            ForbiddenError: If the actor does not host the activity
            InvalidTransitionError: If the request is no longer pending
            PartialFailureError: If the request was accepted but the chat
                participants could not be updated
        """
        with logfire.span(
            "membership_service.decide",
            request_id=request_id,
            action=action.value,
            actor_id=actor_id,
        ):
            request = await self.join_request_repository.find_by_id(request_id)
            if not request:
                logfire.warn("Join request not found", request_id=request_id)
                raise NotFoundError("JoinRequest", request_id)

            activity = await self._get_activity(request.activity_id)
            self._require_host(activity, actor_id, action.value)
            if not activity.is_active:
                raise InvalidTransitionError(f"Activity {activity.id} has ended")

            # Rejects terminal requests before touching the store
            resolved = request.resolve(action, datetime.now(timezone.utc))

            decided = await self.join_request_repository.transition(
                request.id, resolved.status, resolved.decided_at
            )
            logfire.info(
                "Join request decided",
                request_id=request.id,
                activity_id=activity.id,
                status=decided.status.value,
            )

            if decided.is_accepted:
                try:
                    await self.chat_repository.add_participant(
                        ChatId(activity.id), decided.user_id
                    )
                except Exception as e:
                    logfire.error(
                        "Accepted requester not added to chat",
                        request_id=request.id,
                        activity_id=activity.id,
                        user_id=decided.user_id,
                        error=str(e),
                    )
                    raise PartialFailureError(
                        "decide", "add_participant", str(e)
                    ) from e

            return decided

    async def reconcile_participants(
        self, activity_id: ActivityId, actor_id: UserId
    ) -> Chat:
        """Add every accepted requester to the chat participants.

        Repairs a chat left behind by a failed accept. Safe to repeat.

        Raises:
            NotFoundError: If the activity or its chat does not exist
            ForbiddenError: If the actor does not host the activity
        """
        with logfire.span(
            "membership_service.reconcile_participants",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            activity = await self._get_activity(activity_id)
            self._require_host(activity, actor_id, "reconcile")

            chat = await self.chat_repository.find_by_id(ChatId(activity_id))
            if not chat:
                raise NotFoundError("Chat", activity_id)

            accepted = await self.join_request_repository.find_by_activity(
                activity_id, RequestStatus.ACCEPTED
            )
            missing = [r.user_id for r in accepted if not chat.has_participant(r.user_id)]
            for user_id in missing:
                chat = await self.chat_repository.add_participant(chat.id, user_id)

            logfire.info(
                "Participants reconciled",
                activity_id=activity_id,
                added=len(missing),
                participant_count=chat.participant_count,
            )
            return chat

    async def list_requests(
        self, activity_id: ActivityId, actor_id: UserId
    ) -> list[JoinRequest]:
        """Every request of an activity, newest first. Host only.

        Raises:
            NotFoundError: If the activity does not exist
            ForbiddenError: If the actor does not host the activity
        """
        with logfire.span(
            "membership_service.list_requests",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            activity = await self._get_activity(activity_id)
            self._require_host(activity, actor_id, "list requests of")
            requests = await self.join_request_repository.find_by_activity(activity_id)
            return sorted(
                requests, key=lambda r: (r.created_at, r.id), reverse=True
            )

    async def get_request(
        self, activity_id: ActivityId, user_id: UserId
    ) -> Optional[JoinRequest]:
        """The request a user made for an activity, if any."""
        return await self.join_request_repository.find_by_activity_and_user(
            activity_id, user_id
        )

    async def list_requests_by_user(self, user_id: UserId) -> list[JoinRequest]:
        """Every request a user has made, oldest first."""
        with logfire.span("membership_service.list_requests_by_user", user_id=user_id):
            return await self.join_request_repository.find_by_user(user_id)

    async def watch_requests(
        self,
        activity_id: ActivityId,
        actor_id: UserId,
        on_change: SnapshotObserver[list[JoinRequest]],
    ) -> Subscription:
        """Live request list of an activity for its host.

        Raises:
            NotFoundError: If the activity does not exist
            ForbiddenError: If the actor does not host the activity
        """
        activity = await self._get_activity(activity_id)
        self._require_host(activity, actor_id, "watch requests of")
        return await self.join_request_repository.watch_activity(activity_id, on_change)
