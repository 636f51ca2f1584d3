"""End activity use case."""

import logfire
from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import ActivityService
from huddle.domain.value import ActivityId, UserId


class EndActivityRequest(BaseModel):
    """End activity request."""

    activity_id: str
    actor_id: str


class EndActivityResponse(BaseModel):
    """End activity response."""

    activity_id: str
    already_ended: bool
    join_requests_deleted: int
    messages_deleted: int
    chat_deleted: bool
    activity_deleted: bool


class EndActivityUseCase(BaseUseCase):
    """Use case for a host ending their activity.

    Safe to call again: a retry after a partial failure finishes the
    cleanup, and a call for an activity that is already gone succeeds.
    """

    def __init__(self, activity_service: ActivityService) -> None:
        """Initialize end activity use case.

        Args:
            activity_service: Activity domain service
        """
        self.activity_service = activity_service

    async def execute(self, request: EndActivityRequest) -> EndActivityResponse:
        """End the activity and delete its requests, chat and messages.

        Raises:
            ForbiddenError: If the actor does not host the activity
            PartialFailureError: If cleanup stopped part way
        """
        with logfire.span(
            "end_activity.execute",
            activity_id=request.activity_id,
            actor_id=request.actor_id,
        ):
            report = await self.activity_service.end_activity(
                ActivityId(request.activity_id), UserId(request.actor_id)
            )
            if report.already_ended:
                logfire.info("Activity already ended", activity_id=report.activity_id)
        return EndActivityResponse(
            activity_id=report.activity_id,
            already_ended=report.already_ended,
            join_requests_deleted=report.join_requests_deleted,
            messages_deleted=report.messages_deleted,
            chat_deleted=report.chat_deleted,
            activity_deleted=report.activity_deleted,
        )
