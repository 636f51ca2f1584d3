"""Entity store implementation of Chat repository."""

from typing import Optional

from huddle.domain.error import NotFoundError
from huddle.domain.model import Chat
from huddle.domain.repository import ChatRepository, SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, ChatId, UserId
from huddle.persistence.error import RecordNotFoundError
from huddle.persistence.mappers import document_to_chat
from huddle.persistence.store import Collection, EntityStore


class StoreChatRepository(ChatRepository):
    """Chat repository backed by the entity store."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize repository with the entity store.

        Args:
            store: Entity store
        """
        self.store = store

    async def find_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        doc = await self.store.get(Collection.CHATS, chat_id)
        return document_to_chat(doc) if doc else None

    async def find_many(self, chat_ids: list[ChatId]) -> dict[ChatId, Chat]:
        docs = await self.store.get_many(Collection.CHATS, chat_ids)
        return {
            ChatId(record_id): document_to_chat(doc) for record_id, doc in docs.items()
        }

    async def create(self, activity_id: ActivityId, host_id: UserId) -> Chat:
        doc = await self.store.create(
            Collection.CHATS,
            {"host_id": host_id, "participants": [host_id]},
            record_id=activity_id,
        )
        return document_to_chat(doc)

    async def add_participant(self, chat_id: ChatId, user_id: UserId) -> Chat:
        try:
            doc = await self.store.add_to_set(
                Collection.CHATS, chat_id, "participants", user_id
            )
        except RecordNotFoundError:
            raise NotFoundError("Chat", chat_id)
        return document_to_chat(doc)

    async def delete(self, chat_id: ChatId) -> bool:
        try:
            await self.store.delete(Collection.CHATS, chat_id)
        except RecordNotFoundError:
            return False
        return True

    async def watch(
        self, chat_id: ChatId, on_change: SnapshotObserver[Optional[Chat]]
    ) -> Subscription:
        async def deliver(doc):
            await on_change(document_to_chat(doc) if doc else None)

        return await self.store.subscribe(Collection.CHATS, chat_id, deliver)
