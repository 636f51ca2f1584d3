"""Request to join use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import JoinRequestSummary
from huddle.domain.service import MembershipService
from huddle.domain.value import ActivityId, UserId


class RequestToJoinRequest(BaseModel):
    """Request to join request."""

    activity_id: str
    user_id: str  # Identity ID of the authenticated user


class RequestToJoinResponse(BaseModel):
    """Request to join response."""

    request: JoinRequestSummary


class RequestToJoinUseCase(BaseUseCase):
    """Use case for asking to join someone else's activity."""

    def __init__(self, membership_service: MembershipService) -> None:
        """Initialize request to join use case.

        Args:
            membership_service: Join request domain service
        """
        self.membership_service = membership_service

    async def execute(self, request: RequestToJoinRequest) -> RequestToJoinResponse:
        """Create a pending join request.

        Raises:
            NotFoundError: If the activity does not exist
            InvalidTransitionError: If the activity has ended
            ForbiddenError: If the user hosts the activity
            DuplicateRequestError: If the user already asked to join
        """
        join_request = await self.membership_service.request_to_join(
            ActivityId(request.activity_id), UserId(request.user_id)
        )
        return RequestToJoinResponse(
            request=JoinRequestSummary.from_request(join_request)
        )
