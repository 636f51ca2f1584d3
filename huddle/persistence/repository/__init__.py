"""Entity store repository implementations."""

from huddle.persistence.repository.activity import StoreActivityRepository
from huddle.persistence.repository.chat import StoreChatRepository
from huddle.persistence.repository.join_request import (
    StoreJoinRequestRepository,
    join_request_id,
)
from huddle.persistence.repository.message import StoreMessageRepository
from huddle.persistence.repository.profile import StoreProfileRepository

__all__ = [
    "StoreActivityRepository",
    "StoreChatRepository",
    "StoreJoinRequestRepository",
    "StoreMessageRepository",
    "StoreProfileRepository",
    "join_request_id",
]
