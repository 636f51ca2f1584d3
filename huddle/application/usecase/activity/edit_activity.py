"""Edit activity use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import ActivitySummary
from huddle.domain.service import ActivityService
from huddle.domain.value import ActivityFields, ActivityId, UserId


class EditActivityRequest(BaseModel):
    """Edit activity request. Blank optional fields clear the stored value."""

    activity_id: str
    actor_id: str
    title: str
    description: str | None = None
    image_url: str | None = None


class EditActivityResponse(BaseModel):
    """Edit activity response."""

    activity: ActivitySummary


class EditActivityUseCase(BaseUseCase):
    """Use case for a host editing their activity."""

    def __init__(self, activity_service: ActivityService) -> None:
        self.activity_service = activity_service

    async def execute(self, request: EditActivityRequest) -> EditActivityResponse:
        activity = await self.activity_service.edit_activity(
            ActivityId(request.activity_id),
            UserId(request.actor_id),
            ActivityFields(
                title=request.title,
                description=request.description,
                image_url=request.image_url,
            ),
        )
        return EditActivityResponse(activity=ActivitySummary.from_activity(activity))
