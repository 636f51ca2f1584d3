"""Chat domain service."""

from typing import Optional

import logfire

from huddle.domain.error import InvalidTransitionError, NotFoundError, ValidationError
from huddle.domain.model import Chat, DisplayProfile, Message
from huddle.domain.repository import (
    ChatRepository,
    MessageRepository,
    SnapshotObserver,
    Subscription,
)
from huddle.domain.value import MESSAGE_MAX_LENGTH, ChatId, UserId

from .access_service import AccessService
from .base import Service
from .profile_service import ProfileService


def normalize_message(text: str) -> str:
    """Trim a message and check its length.

    Raises:
        ValidationError: If the trimmed text is empty or too long
    """
    text = text.strip()
    if not text:
        raise ValidationError("Message cannot be empty")
    if len(text) > MESSAGE_MAX_LENGTH:
        raise ValidationError(
            f"Message must be at most {MESSAGE_MAX_LENGTH} characters"
        )
    return text


class ChatService(Service):
    """Domain service for chat messages and participants.

    Every operation checks chat access against the actor's join request.
    """

    def __init__(
        self,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
        access_service: AccessService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize chat service.

        Args:
            chat_repository: Chat repository
            message_repository: Message repository
            access_service: Chat access rules
            profile_service: Profile lookups for usernames and participants
        """
        self.chat_repository = chat_repository
        self.message_repository = message_repository
        self.access_service = access_service
        self.profile_service = profile_service

    async def find_chat(self, chat_id: ChatId) -> Optional[Chat]:
        """Get a chat if it exists."""
        return await self.chat_repository.find_by_id(chat_id)

    async def find_chats(self, chat_ids: list[ChatId]) -> dict[ChatId, Chat]:
        """Batch lookup of chats; missing ones are left out."""
        return await self.chat_repository.find_many(chat_ids)

    async def get_chat(self, chat_id: ChatId) -> Chat:
        """Get a chat.

        Raises:
            NotFoundError: If the chat does not exist
        """
        chat = await self.chat_repository.find_by_id(chat_id)
        if not chat:
            raise NotFoundError("Chat", chat_id)
        return chat

    async def send_message(
        self,
        chat_id: ChatId,
        actor_id: UserId,
        text: str,
        display_name: Optional[str] = None,
    ) -> Message:
        """Post a message to a chat.

        The author's current username is copied onto the message.

        Args:
            chat_id: Chat to post to
            actor_id: Author
            text: Message text, trimmed before storing
            display_name: Identity display name, used when the author has
                no profile

        Returns:
            The stored message with its server timestamp

        Raises:
            ValidationError: If the text is empty or longer than 500 characters
            NotFoundError: If the chat's activity does not exist
            ForbiddenError: If the actor may not access the chat
            InvalidTransitionError: If the activity has ended
        """
        with logfire.span(
            "chat_service.send_message", chat_id=chat_id, actor_id=actor_id
        ):
            body = normalize_message(text)
            activity = await self.access_service.require_chat_access(
                chat_id, actor_id, "post to"
            )
            if not activity.is_active:
                raise InvalidTransitionError(f"Activity {activity.id} has ended")

            username = await self.profile_service.username_snapshot(
                actor_id, display_name
            )
            message = await self.message_repository.append(
                chat_id, actor_id, username, body
            )
            # Ending marks the activity before deleting messages
            if not await self.access_service.is_active(activity.id):
                await self.message_repository.delete(message.id)
                logfire.warn(
                    "Message withdrawn, activity ended meanwhile",
                    message_id=message.id,
                    chat_id=chat_id,
                )
                raise InvalidTransitionError(f"Activity {activity.id} has ended")

            logfire.info(
                "Message sent",
                message_id=message.id,
                chat_id=chat_id,
                user_id=actor_id,
            )
            return message

    async def list_messages(self, chat_id: ChatId, actor_id: UserId) -> list[Message]:
        """Messages of a chat in order.

        Raises:
            NotFoundError: If the chat's activity does not exist
            ForbiddenError: If the actor may not access the chat
        """
        with logfire.span(
            "chat_service.list_messages", chat_id=chat_id, actor_id=actor_id
        ):
            await self.access_service.require_chat_access(chat_id, actor_id)
            return await self.message_repository.find_by_chat(chat_id)

    async def watch_messages(
        self,
        chat_id: ChatId,
        actor_id: UserId,
        on_change: SnapshotObserver[list[Message]],
    ) -> Subscription:
        """Live ordered message list of a chat.

        Raises:
            NotFoundError: If the chat's activity does not exist
            ForbiddenError: If the actor may not access the chat
        """
        await self.access_service.require_chat_access(chat_id, actor_id)
        subscription = await self.message_repository.watch_chat(chat_id, on_change)
        logfire.info("Message feed opened", chat_id=chat_id, actor_id=actor_id)
        return subscription

    async def list_participants(
        self, chat_id: ChatId, actor_id: UserId
    ) -> list[DisplayProfile]:
        """Display profiles of the chat participants, host first.

        Raises:
            NotFoundError: If the chat does not exist
            ForbiddenError: If the actor may not access the chat
        """
        with logfire.span(
            "chat_service.list_participants", chat_id=chat_id, actor_id=actor_id
        ):
            await self.access_service.require_chat_access(chat_id, actor_id)
            chat = await self.get_chat(chat_id)
            ordered = [chat.host_id] + sorted(
                p for p in chat.participants if p != chat.host_id
            )
            profiles = await self.profile_service.get_display_profiles(ordered)
            return [profiles[user_id] for user_id in ordered]
