"""Domain value objects for Huddle."""

from huddle.domain.value.identifiers import (
    ActivityId,
    ChatId,
    JoinRequestId,
    MessageId,
    UserId,
)
from huddle.domain.value.types import (
    DESCRIPTION_MAX_LENGTH,
    MESSAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ActivityFields,
    Identity,
    ImageDataUrl,
    RequestAction,
    RequestStatus,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "ActivityId",
    "JoinRequestId",
    "ChatId",
    "MessageId",
    # Types
    "RequestStatus",
    "RequestAction",
    "Username",
    "ImageDataUrl",
    "Identity",
    "ActivityFields",
    # Limits
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "MESSAGE_MAX_LENGTH",
]
