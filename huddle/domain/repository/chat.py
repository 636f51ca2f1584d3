"""Chat repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from huddle.domain.model.chat import Chat
from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, ChatId, UserId


class ChatRepository(ABC):
    """Repository for Chat entity."""

    @abstractmethod
    async def find_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        """Find a chat by ID (equal to its activity ID)."""
        pass

    @abstractmethod
    async def find_many(self, chat_ids: list[ChatId]) -> dict[ChatId, Chat]:
        """Batch lookup of chats. Missing ones are left out."""
        pass

    @abstractmethod
    async def create(self, activity_id: ActivityId, host_id: UserId) -> Chat:
        """Create the chat of an activity with the host as sole participant."""
        pass

    @abstractmethod
    async def add_participant(self, chat_id: ChatId, user_id: UserId) -> Chat:
        """Atomically add a user to the participant set.

        Adding an existing participant is a no-op.

        Raises:
            NotFoundError: If the chat does not exist
        """
        pass

    @abstractmethod
    async def delete(self, chat_id: ChatId) -> bool:
        """Hard-delete a chat.

        Returns:
            True if deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def watch(
        self, chat_id: ChatId, on_change: SnapshotObserver[Optional[Chat]]
    ) -> Subscription:
        """Subscribe to a chat; None is delivered once it is deleted."""
        pass
