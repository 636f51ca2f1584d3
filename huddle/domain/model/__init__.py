"""Domain model entities for Huddle."""

from huddle.domain.model.activity import DEFAULT_MAX_PARTICIPANTS, Activity
from huddle.domain.model.chat import Chat
from huddle.domain.model.join_request import JoinRequest
from huddle.domain.model.message import Message
from huddle.domain.model.profile import DisplayProfile, Profile

__all__ = [
    "Activity",
    "Chat",
    "DEFAULT_MAX_PARTICIPANTS",
    "DisplayProfile",
    "JoinRequest",
    "Message",
    "Profile",
]
