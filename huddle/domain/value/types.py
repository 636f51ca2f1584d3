"""Domain value objects for Huddle.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import base64
import binascii
import re
from enum import Enum

from pydantic import field_validator

from huddle.domain.value.common import RootValueObject, ValueObject

# Field limits shared by the services and the API layer
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MESSAGE_MAX_LENGTH = 500
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


class RequestStatus(str, Enum):
    """Status of a join request.

    PENDING is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RequestAction(str, Enum):
    """Decision a host can take on a pending join request."""

    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def resolved_status(self) -> RequestStatus:
        """Status a pending request moves to under this action."""
        if self is RequestAction.ACCEPT:
            return RequestStatus.ACCEPTED
        return RequestStatus.REJECTED


class Username(RootValueObject[str]):
    """Public username shown next to messages and requests.

    Must be 3-50 characters after trimming surrounding whitespace.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username length."""
        v = v.strip()
        if len(v) < USERNAME_MIN_LENGTH or len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(
                f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
            )
        return v


_DATA_URL = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,(.+)$", re.DOTALL)


class ImageDataUrl(RootValueObject[str]):
    """Inline image encoded as a base64 ``data:`` URL."""

    @field_validator("root")
    @classmethod
    def validate_data_url(cls, v: str) -> str:
        """Validate that the value is a base64 image data URL."""
        match = _DATA_URL.match(v)
        if not match:
            raise ValueError("Profile image must be a base64 image data URL")
        try:
            base64.b64decode(match.group(2), validate=True)
        except binascii.Error:
            raise ValueError("Profile image is not valid base64")
        return v

    @property
    def media_type(self) -> str:
        """MIME type declared by the data URL."""
        return _DATA_URL.match(self.root).group(1)

    @property
    def size_bytes(self) -> int:
        """Decoded size of the image payload."""
        return len(base64.b64decode(_DATA_URL.match(self.root).group(2)))


class Identity(ValueObject):
    """Authenticated identity as reported by the identity provider."""

    id: str
    display_name: str | None = None
    email: str | None = None


class ActivityFields(ValueObject):
    """Host-editable fields of an activity, as submitted.

    Values are raw input; the activity service trims and validates them.
    """

    title: str
    description: str | None = None
    image_url: str | None = None
    max_participants: int | None = None
