"""Profile response shape."""

from datetime import datetime

from pydantic import BaseModel

from huddle.domain.model import Profile


class ProfileResponse(BaseModel):
    """Full profile as seen by its owner."""

    user_id: str
    username: str
    name: str | None
    email: str | None
    profile_image: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            user_id=profile.id,
            username=profile.username.root,
            name=profile.name,
            email=profile.email,
            profile_image=profile.profile_image.root if profile.profile_image else None,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
