"""Join request routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel

from huddle.application.usecase.membership import (
    DecideRequestRequest,
    DecideRequestResponse,
    DecideRequestUseCase,
)
from huddle.domain.service import IdentityProvider
from huddle.domain.value import RequestAction
from huddle.interface.api.auth import resolve_identity

router = APIRouter(prefix="/requests", tags=["requests"], route_class=DishkaRoute)


class DecideRequestAPIRequest(BaseModel):
    """API request for deciding a join request."""

    action: RequestAction


@router.post("/{request_id}/decision", response_model=DecideRequestResponse)
async def decide_request(
    request_id: str,
    request: DecideRequestAPIRequest,
    decide_request_use_case: FromDishka[DecideRequestUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DecideRequestResponse:
    """Accept or reject a pending join request. Host only.

    Responds 409 if the request was already decided.
    """
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await decide_request_use_case.execute(
        DecideRequestRequest(
            request_id=request_id, action=request.action, actor_id=identity.id
        )
    )
