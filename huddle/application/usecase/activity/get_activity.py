"""Get activity detail use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import (
    ActivitySummary,
    JoinRequestSummary,
    ProfileSummary,
)
from huddle.domain.service import (
    AccessService,
    ActivityService,
    ChatService,
    MembershipService,
    ProfileService,
)
from huddle.domain.value import ActivityId, ChatId, UserId


class GetActivityRequest(BaseModel):
    """Get activity request."""

    activity_id: str
    viewer_id: str  # Identity ID of the authenticated user


class GetActivityResponse(BaseModel):
    """Activity detail as seen by one viewer.

    ``requests`` is only filled for the host.
    """

    activity: ActivitySummary
    host: ProfileSummary
    is_host: bool
    can_access_chat: bool
    own_request: JoinRequestSummary | None
    participant_count: int
    requests: list[JoinRequestSummary]


class GetActivityUseCase(BaseUseCase):
    """Use case for the activity detail page."""

    def __init__(
        self,
        activity_service: ActivityService,
        membership_service: MembershipService,
        chat_service: ChatService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get activity use case.

        Args:
            activity_service: Activity domain service
            membership_service: Join request domain service
            chat_service: Chat domain service
            profile_service: Profile domain service
        """
        self.activity_service = activity_service
        self.membership_service = membership_service
        self.chat_service = chat_service
        self.profile_service = profile_service

    async def execute(self, request: GetActivityRequest) -> GetActivityResponse:
        """Load the activity with the viewer's role, request and access.

        Steps:
        1. Load the activity
        2. Load the viewer's own request and derive chat access
        3. For the host, load every request with requester profiles

        Raises:
            NotFoundError: If the activity does not exist
        """
        activity_id = ActivityId(request.activity_id)
        viewer_id = UserId(request.viewer_id)

        activity = await self.activity_service.get_activity(activity_id)
        is_host = activity.is_host(viewer_id)

        own_request = None
        if not is_host:
            own_request = await self.membership_service.get_request(
                activity_id, viewer_id
            )

        chat = await self.chat_service.find_chat(ChatId(activity_id))

        requests = []
        if is_host:
            requests = await self.membership_service.list_requests(
                activity_id, viewer_id
            )

        profiles = await self.profile_service.get_display_profiles(
            [activity.host_id] + [r.user_id for r in requests]
        )

        return GetActivityResponse(
            activity=ActivitySummary.from_activity(activity),
            host=ProfileSummary.from_display_profile(profiles[activity.host_id]),
            is_host=is_host,
            can_access_chat=AccessService.can_access_chat(
                activity, own_request, viewer_id
            ),
            own_request=JoinRequestSummary.from_request(own_request)
            if own_request
            else None,
            participant_count=AccessService.participant_count(chat),
            requests=[
                JoinRequestSummary.from_request(r, profiles[r.user_id])
                for r in requests
            ],
        )
