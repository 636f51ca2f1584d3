"""Get chat use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import (
    ActivitySummary,
    MessageSummary,
    ProfileSummary,
)
from huddle.domain.service import ActivityService, ChatService
from huddle.domain.value import ActivityId, ChatId, UserId


class GetChatRequest(BaseModel):
    """Get chat request."""

    chat_id: str
    user_id: str  # Identity ID of the authenticated user


class GetChatResponse(BaseModel):
    """Chat page: activity header, ordered messages and participants."""

    activity: ActivitySummary
    messages: list[MessageSummary]
    participants: list[ProfileSummary]
    participant_count: int


class GetChatUseCase(BaseUseCase):
    """Use case for opening an activity chat."""

    def __init__(
        self, chat_service: ChatService, activity_service: ActivityService
    ) -> None:
        """Initialize get chat use case.

        Args:
            chat_service: Chat domain service
            activity_service: Activity domain service
        """
        self.chat_service = chat_service
        self.activity_service = activity_service

    async def execute(self, request: GetChatRequest) -> GetChatResponse:
        """Load the chat for a user with access.

        Raises:
            NotFoundError: If the chat does not exist
            ForbiddenError: If the user may not access the chat
        """
        chat_id = ChatId(request.chat_id)
        user_id = UserId(request.user_id)

        messages = await self.chat_service.list_messages(chat_id, user_id)
        participants = await self.chat_service.list_participants(chat_id, user_id)
        activity = await self.activity_service.get_activity(ActivityId(chat_id))

        return GetChatResponse(
            activity=ActivitySummary.from_activity(activity),
            messages=[MessageSummary.from_message(m) for m in messages],
            participants=[ProfileSummary.from_display_profile(p) for p in participants],
            participant_count=len(participants),
        )
