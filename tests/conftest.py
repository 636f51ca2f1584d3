"""Test configuration and helpers."""

import base64

import logfire

from huddle.domain.model import Activity, Chat, JoinRequest
from huddle.domain.service import ActivityService, MembershipService
from huddle.domain.value import ActivityFields, RequestAction, UserId

# Keep test output free of telemetry
logfire.configure(send_to_logfire=False, console=False)

HOST = UserId("host-user")
ALICE = UserId("alice")
BOB = UserId("bob")
CAROL = UserId("carol")


def image_data_url(size: int = 16, media_type: str = "image/png") -> str:
    """Build a valid base64 image data URL with a payload of ``size`` bytes."""
    payload = base64.b64encode(b"\x89" * size).decode()
    return f"data:{media_type};base64,{payload}"


async def host_activity(
    activity_service: ActivityService,
    host_id: UserId = HOST,
    title: str = "Board Games",
) -> tuple[Activity, Chat]:
    """Create an activity with its chat."""
    return await activity_service.create_activity(
        host_id, ActivityFields(title=title, description="Bring snacks")
    )


async def accepted_member(
    membership_service: MembershipService,
    activity: Activity,
    user_id: UserId,
) -> JoinRequest:
    """Have a user request to join and the host accept."""
    request = await membership_service.request_to_join(activity.id, user_id)
    return await membership_service.decide(
        request.id, RequestAction.ACCEPT, activity.host_id
    )
