"""Decide join request use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import JoinRequestSummary
from huddle.domain.service import MembershipService
from huddle.domain.value import JoinRequestId, RequestAction, UserId


class DecideRequestRequest(BaseModel):
    """Decide join request request."""

    request_id: str
    action: RequestAction
    actor_id: str  # Must be the activity host


class DecideRequestResponse(BaseModel):
    """Decide join request response."""

    request: JoinRequestSummary


class DecideRequestUseCase(BaseUseCase):
    """Use case for a host accepting or rejecting a join request."""

    def __init__(self, membership_service: MembershipService) -> None:
        """Initialize decide request use case.

        Args:
            membership_service: Join request domain service
        """
        self.membership_service = membership_service

    async def execute(self, request: DecideRequestRequest) -> DecideRequestResponse:
        """Accept or reject the request.

        Raises:
            NotFoundError: If the request does not exist
            ForbiddenError: If the actor does not host the activity
            InvalidTransitionError: If the request was already decided
            PartialFailureError: If the requester could not be added to the chat
        """
        decided = await self.membership_service.decide(
            JoinRequestId(request.request_id), request.action, UserId(request.actor_id)
        )
        return DecideRequestResponse(request=JoinRequestSummary.from_request(decided))
