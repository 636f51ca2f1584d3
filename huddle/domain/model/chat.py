"""Chat entity.

Each activity owns exactly one chat, keyed by the activity id.
"""

from datetime import datetime

from pydantic import model_validator

from huddle.domain.model.common import DomainModel
from huddle.domain.value import ChatId, UserId


class Chat(DomainModel):
    """Group chat of an activity.

    The participant set always contains the host and otherwise only users
    whose join request was accepted. It mirrors the accepted requests and
    is used for display and counting, never for access decisions.
    """

    id: ChatId
    host_id: UserId
    participants: frozenset[UserId]
    created_at: datetime

    @model_validator(mode="after")
    def host_is_participant(self) -> "Chat":
        if self.host_id not in self.participants:
            raise ValueError("Chat host must be a participant")
        return self

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    def has_participant(self, user_id: UserId) -> bool:
        return user_id in self.participants
