"""Get dashboard use case."""

import logfire
from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import ActivitySummary
from huddle.domain.model import Activity
from huddle.domain.service import (
    AccessService,
    ActivityService,
    ChatService,
    MembershipService,
)
from huddle.domain.value import ChatId, RequestStatus, UserId


class DashboardActivity(BaseModel):
    """Activity card on the dashboard."""

    activity: ActivitySummary
    participant_count: int
    pending_request_count: int = 0  # Only counted for hosted activities


class GetDashboardRequest(BaseModel):
    """Get dashboard request."""

    user_id: str


class GetDashboardResponse(BaseModel):
    """Activities a user hosts, is waiting on and has joined."""

    hosted: list[DashboardActivity]
    waiting: list[DashboardActivity]
    accepted: list[DashboardActivity]
    hosted_count: int
    waiting_count: int
    accepted_count: int


class GetDashboardUseCase(BaseUseCase):
    """Use case for the user's dashboard."""

    def __init__(
        self,
        activity_service: ActivityService,
        membership_service: MembershipService,
        chat_service: ChatService,
    ) -> None:
        """Initialize get dashboard use case.

        Args:
            activity_service: Activity domain service
            membership_service: Join request domain service
            chat_service: Chat domain service
        """
        self.activity_service = activity_service
        self.membership_service = membership_service
        self.chat_service = chat_service

    async def execute(self, request: GetDashboardRequest) -> GetDashboardResponse:
        """Execute get dashboard flow.

        Ended activities are left out of every list. Chats of all cards are
        loaded in one batch.
        """
        user_id = UserId(request.user_id)

        hosted_activities = await self.activity_service.list_hosted_activities(
            user_id
        )
        pending_counts = {}
        for activity in hosted_activities:
            requests = await self.membership_service.list_requests(activity.id, user_id)
            pending_counts[activity.id] = sum(1 for r in requests if r.is_pending)

        own_requests = await self.membership_service.list_requests_by_user(user_id)
        activities = await self.activity_service.get_activities(
            [r.activity_id for r in own_requests]
        )

        waiting_activities = []
        accepted_activities = []
        for own in own_requests:
            activity = activities.get(own.activity_id)
            if activity is None or not activity.is_active:
                continue
            if own.status == RequestStatus.PENDING:
                waiting_activities.append(activity)
            elif own.status == RequestStatus.ACCEPTED:
                accepted_activities.append(activity)

        chats = await self.chat_service.find_chats(
            [
                ChatId(activity.id)
                for activity in (
                    hosted_activities + waiting_activities + accepted_activities
                )
            ]
        )

        def card(activity: Activity) -> DashboardActivity:
            return DashboardActivity(
                activity=ActivitySummary.from_activity(activity),
                participant_count=AccessService.participant_count(
                    chats.get(ChatId(activity.id))
                ),
                pending_request_count=pending_counts.get(activity.id, 0),
            )

        hosted = [card(activity) for activity in hosted_activities]
        waiting = [card(activity) for activity in waiting_activities]
        accepted = [card(activity) for activity in accepted_activities]

        logfire.info(
            "Dashboard built",
            user_id=user_id,
            hosted=len(hosted),
            waiting=len(waiting),
            accepted=len(accepted),
        )

        return GetDashboardResponse(
            hosted=hosted,
            waiting=waiting,
            accepted=accepted,
            hosted_count=len(hosted),
            waiting_count=len(waiting),
            accepted_count=len(accepted),
        )
