"""Message repository interface."""

from abc import ABC, abstractmethod

from huddle.domain.model.message import Message
from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.domain.value import ChatId, MessageId, UserId


class MessageRepository(ABC):
    """Repository for Message entity. Messages are append-only."""

    @abstractmethod
    async def find_by_chat(self, chat_id: ChatId) -> list[Message]:
        """Find all messages of a chat ordered by (created_at, id)."""
        pass

    @abstractmethod
    async def append(
        self, chat_id: ChatId, user_id: UserId, username: str, message: str
    ) -> Message:
        """Append a message; the store assigns ID and timestamp."""
        pass

    @abstractmethod
    async def delete(self, message_id: MessageId) -> bool:
        """Hard-delete a message (only used by the end-activity cascade).

        Returns:
            True if deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def watch_chat(
        self, chat_id: ChatId, on_change: SnapshotObserver[list[Message]]
    ) -> Subscription:
        """Subscribe to the ordered message list of a chat."""
        pass
