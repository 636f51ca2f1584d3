"""Send message use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.common import MessageSummary
from huddle.domain.service import ChatService
from huddle.domain.value import ChatId, UserId


class SendMessageRequest(BaseModel):
    """Send message request."""

    chat_id: str
    user_id: str  # Identity ID of the authenticated user
    display_name: str | None = None  # Identity display name, username fallback
    message: str


class SendMessageResponse(BaseModel):
    """Send message response."""

    message: MessageSummary


class SendMessageUseCase(BaseUseCase):
    """Use case for posting to an activity chat."""

    def __init__(self, chat_service: ChatService) -> None:
        """Initialize send message use case.

        Args:
            chat_service: Chat domain service
        """
        self.chat_service = chat_service

    async def execute(self, request: SendMessageRequest) -> SendMessageResponse:
        """Post the message.

        Raises:
            ValidationError: If the message is empty or too long
            ForbiddenError: If the user may not access the chat
            InvalidTransitionError: If the activity has ended
        """
        message = await self.chat_service.send_message(
            ChatId(request.chat_id),
            UserId(request.user_id),
            request.message,
            display_name=request.display_name,
        )
        return SendMessageResponse(message=MessageSummary.from_message(message))
