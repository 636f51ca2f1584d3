"""Profile entity.

A profile is created at signup and keyed by the identity id.
"""

from datetime import datetime
from typing import Optional

from huddle.domain.model.common import DomainModel
from huddle.domain.value import ImageDataUrl, UserId, Username


class Profile(DomainModel):
    """Public profile of a user. Only its owner mutates it."""

    id: UserId
    username: Username
    name: Optional[str] = None
    email: Optional[str] = None
    profile_image: Optional[ImageDataUrl] = None
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        return self.name or self.username.root


class DisplayProfile(DomainModel):
    """Read-only projection used next to requests, messages and participants.

    Missing profiles degrade to a placeholder instead of failing the view.
    """

    id: UserId
    username: str
    name: str
    profile_image: Optional[str] = None
    is_placeholder: bool = False
