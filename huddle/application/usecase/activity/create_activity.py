"""Create activity use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import ActivitySummary
from huddle.domain.service import AccessService, ActivityService
from huddle.domain.value import ActivityFields, UserId


class CreateActivityRequest(BaseModel):
    """Create activity request."""

    host_id: str  # Identity ID of the authenticated user
    title: str
    description: str | None = None
    image_url: str | None = None
    max_participants: int | None = None


class CreateActivityResponse(BaseModel):
    """Create activity response."""

    activity: ActivitySummary
    chat_id: str
    participant_count: int


class CreateActivityUseCase(BaseUseCase):
    """Use case for hosting a new activity."""

    def __init__(self, activity_service: ActivityService) -> None:
        """Initialize create activity use case.

        Args:
            activity_service: Activity domain service
        """
        self.activity_service = activity_service

    async def execute(self, request: CreateActivityRequest) -> CreateActivityResponse:
        """Create the activity and its chat.

        Raises:
            ValidationError: If a field is invalid
            PartialFailureError: If the chat could not be created
        """
        activity, chat = await self.activity_service.create_activity(
            UserId(request.host_id),
            ActivityFields(
                title=request.title,
                description=request.description,
                image_url=request.image_url,
                max_participants=request.max_participants,
            ),
        )
        return CreateActivityResponse(
            activity=ActivitySummary.from_activity(activity),
            chat_id=chat.id,
            participant_count=AccessService.participant_count(chat),
        )
