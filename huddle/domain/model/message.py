"""Chat message entity."""

from datetime import datetime

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import MESSAGE_MAX_LENGTH, ChatId, MessageId, UserId


class Message(DomainModel):
    """Append-only chat message.

    Messages are totally ordered by (created_at, id); created_at is assigned
    by the store, username is a snapshot taken when the message was sent.
    """

    id: MessageId
    chat_id: ChatId
    user_id: UserId
    username: str
    message: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)
    created_at: datetime

    @property
    def sort_key(self) -> tuple[datetime, str]:
        return (self.created_at, self.id)
