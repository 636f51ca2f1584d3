"""Activity aggregate root.

An activity is a hosted event that other users can request to join.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ActivityId,
    UserId,
)

DEFAULT_MAX_PARTICIPANTS = 10


class Activity(DomainModel):
    """Activity aggregate root.

    Business rules:
    - host_id never changes after creation
    - Only the host edits or ends the activity
    - ended_at is set at the start of the end-activity cascade; an ended
      activity admits no new join requests or messages
    """

    id: ActivityId
    host_id: UserId
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    image_url: Optional[str] = None
    max_participants: int = Field(default=DEFAULT_MAX_PARTICIPANTS, ge=1)
    created_at: datetime
    updated_at: datetime
    ended_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def is_host(self, user_id: UserId) -> bool:
        return self.host_id == user_id
