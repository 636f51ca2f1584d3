"""Response shapes shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from huddle.domain.model import Activity, DisplayProfile, JoinRequest, Message


class ActivitySummary(BaseModel):
    """Activity as shown in lists and detail pages."""

    activity_id: str
    host_id: str
    title: str
    description: str | None
    image_url: str | None
    max_participants: int
    created_at: datetime
    updated_at: datetime
    ended_at: datetime | None

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivitySummary":
        return cls(
            activity_id=activity.id,
            host_id=activity.host_id,
            title=activity.title,
            description=activity.description,
            image_url=activity.image_url,
            max_participants=activity.max_participants,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
            ended_at=activity.ended_at,
        )


class ProfileSummary(BaseModel):
    """Public profile shown next to requests, messages and participants."""

    user_id: str
    username: str
    name: str
    profile_image: str | None
    is_placeholder: bool

    @classmethod
    def from_display_profile(cls, profile: DisplayProfile) -> "ProfileSummary":
        return cls(
            user_id=profile.id,
            username=profile.username,
            name=profile.name,
            profile_image=profile.profile_image,
            is_placeholder=profile.is_placeholder,
        )


class JoinRequestSummary(BaseModel):
    """Join request, with the requester's profile where it was loaded."""

    request_id: str
    activity_id: str
    user_id: str
    status: str
    created_at: datetime
    decided_at: datetime | None
    requester: ProfileSummary | None = None

    @classmethod
    def from_request(
        cls, request: JoinRequest, requester: DisplayProfile | None = None
    ) -> "JoinRequestSummary":
        return cls(
            request_id=request.id,
            activity_id=request.activity_id,
            user_id=request.user_id,
            status=request.status.value,
            created_at=request.created_at,
            decided_at=request.decided_at,
            requester=ProfileSummary.from_display_profile(requester)
            if requester
            else None,
        )


class MessageSummary(BaseModel):
    """Chat message."""

    message_id: str
    chat_id: str
    user_id: str
    username: str
    message: str
    created_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageSummary":
        return cls(
            message_id=message.id,
            chat_id=message.chat_id,
            user_id=message.user_id,
            username=message.username,
            message=message.message,
            created_at=message.created_at,
        )
