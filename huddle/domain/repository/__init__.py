"""Repository interfaces for the Huddle domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from huddle.domain.repository.activity import ActivityRepository
from huddle.domain.repository.chat import ChatRepository
from huddle.domain.repository.join_request import JoinRequestRepository
from huddle.domain.repository.message import MessageRepository
from huddle.domain.repository.profile import ProfileRepository
from huddle.domain.repository.subscription import (
    SnapshotObserver,
    Subscription,
    SubscriptionGroup,
)

__all__ = [
    "ActivityRepository",
    "ChatRepository",
    "JoinRequestRepository",
    "MessageRepository",
    "ProfileRepository",
    "SnapshotObserver",
    "Subscription",
    "SubscriptionGroup",
]
