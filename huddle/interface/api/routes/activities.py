"""Activity routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from huddle.application.usecase.activity import (
    CreateActivityRequest,
    CreateActivityResponse,
    CreateActivityUseCase,
    EditActivityRequest,
    EditActivityResponse,
    EditActivityUseCase,
    EndActivityRequest,
    EndActivityResponse,
    EndActivityUseCase,
    GetActivityRequest,
    GetActivityResponse,
    GetActivityUseCase,
    GetDashboardRequest,
    GetDashboardResponse,
    GetDashboardUseCase,
)
from huddle.application.usecase.membership import (
    ReconcileParticipantsRequest,
    ReconcileParticipantsResponse,
    ReconcileParticipantsUseCase,
    RequestToJoinRequest,
    RequestToJoinResponse,
    RequestToJoinUseCase,
)
from huddle.domain.service import IdentityProvider
from huddle.interface.api.auth import resolve_identity

router = APIRouter(prefix="/activities", tags=["activities"], route_class=DishkaRoute)


class CreateActivityAPIRequest(BaseModel):
    """API request for creating an activity.

    Length limits are checked after trimming by the activity service.
    """

    title: str
    description: str | None = None
    image_url: str | None = None
    max_participants: int | None = Field(default=None, ge=1)


class EditActivityAPIRequest(BaseModel):
    """API request for editing an activity."""

    title: str
    description: str | None = None
    image_url: str | None = None


@router.post(
    "", response_model=CreateActivityResponse, status_code=status.HTTP_201_CREATED
)
async def create_activity(
    request: CreateActivityAPIRequest,
    create_activity_use_case: FromDishka[CreateActivityUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateActivityResponse:
    """Host a new activity. The caller becomes its host and first participant."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await create_activity_use_case.execute(
        CreateActivityRequest(
            host_id=identity.id,
            title=request.title,
            description=request.description,
            image_url=request.image_url,
            max_participants=request.max_participants,
        )
    )


@router.get("/dashboard", response_model=GetDashboardResponse)
async def get_dashboard(
    get_dashboard_use_case: FromDishka[GetDashboardUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetDashboardResponse:
    """Activities the caller hosts, is waiting on and has joined."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await get_dashboard_use_case.execute(GetDashboardRequest(user_id=identity.id))


@router.get("/{activity_id}", response_model=GetActivityResponse)
async def get_activity(
    activity_id: str,
    get_activity_use_case: FromDishka[GetActivityUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetActivityResponse:
    """Activity detail with the caller's role, request status and chat access.

    Hosts also receive every join request with the requester's profile.
    """
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await get_activity_use_case.execute(
        GetActivityRequest(activity_id=activity_id, viewer_id=identity.id)
    )


@router.patch("/{activity_id}", response_model=EditActivityResponse)
async def edit_activity(
    activity_id: str,
    request: EditActivityAPIRequest,
    edit_activity_use_case: FromDishka[EditActivityUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> EditActivityResponse:
    """Edit an activity. Host only."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await edit_activity_use_case.execute(
        EditActivityRequest(
            activity_id=activity_id,
            actor_id=identity.id,
            title=request.title,
            description=request.description,
            image_url=request.image_url,
        )
    )


@router.delete("/{activity_id}", response_model=EndActivityResponse)
async def end_activity(
    activity_id: str,
    end_activity_use_case: FromDishka[EndActivityUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> EndActivityResponse:
    """End an activity, deleting its requests, chat and messages. Host only.

    Responds 503 when cleanup stopped part way; repeating the call
    finishes it.
    """
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await end_activity_use_case.execute(
        EndActivityRequest(activity_id=activity_id, actor_id=identity.id)
    )


@router.post(
    "/{activity_id}/requests",
    response_model=RequestToJoinResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_to_join(
    activity_id: str,
    request_to_join_use_case: FromDishka[RequestToJoinUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RequestToJoinResponse:
    """Ask to join an activity."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await request_to_join_use_case.execute(
        RequestToJoinRequest(activity_id=activity_id, user_id=identity.id)
    )


@router.post(
    "/{activity_id}/participants/reconcile",
    response_model=ReconcileParticipantsResponse,
)
async def reconcile_participants(
    activity_id: str,
    reconcile_participants_use_case: FromDishka[ReconcileParticipantsUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ReconcileParticipantsResponse:
    """Add every accepted requester to the chat. Host only."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await reconcile_participants_use_case.execute(
        ReconcileParticipantsRequest(activity_id=activity_id, actor_id=identity.id)
    )
