"""Entity store implementation of Message repository."""

from huddle.domain.model import Message
from huddle.domain.repository import MessageRepository, SnapshotObserver, Subscription
from huddle.domain.value import ChatId, MessageId, UserId
from huddle.persistence.error import RecordNotFoundError
from huddle.persistence.mappers import document_to_message
from huddle.persistence.store import Collection, EntityStore

# Total order of a chat: server timestamp, ties broken by ID
MESSAGE_ORDER = ("created_at", "id")


class StoreMessageRepository(MessageRepository):
    """Message repository backed by the entity store."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize repository with the entity store.

        Args:
            store: Entity store
        """
        self.store = store

    async def find_by_chat(self, chat_id: ChatId) -> list[Message]:
        docs = await self.store.query(
            Collection.MESSAGES, where={"chat_id": chat_id}, order_by=MESSAGE_ORDER
        )
        return [document_to_message(doc) for doc in docs]

    async def append(
        self, chat_id: ChatId, user_id: UserId, username: str, message: str
    ) -> Message:
        doc = await self.store.create(
            Collection.MESSAGES,
            {
                "chat_id": chat_id,
                "user_id": user_id,
                "username": username,
                "message": message,
            },
        )
        return document_to_message(doc)

    async def delete(self, message_id: MessageId) -> bool:
        try:
            await self.store.delete(Collection.MESSAGES, message_id)
        except RecordNotFoundError:
            return False
        return True

    async def watch_chat(
        self, chat_id: ChatId, on_change: SnapshotObserver[list[Message]]
    ) -> Subscription:
        async def deliver(docs):
            await on_change([document_to_message(doc) for doc in docs])

        return await self.store.subscribe(
            Collection.MESSAGES, {"chat_id": chat_id}, deliver, order_by=MESSAGE_ORDER
        )
