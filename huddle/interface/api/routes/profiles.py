"""Profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from huddle.application.usecase.profile import (
    CreateProfileRequest,
    CreateProfileUseCase,
    GetProfileRequest,
    GetProfileUseCase,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from huddle.domain.service import IdentityProvider
from huddle.interface.api.auth import resolve_identity

router = APIRouter(prefix="/profiles", tags=["profiles"], route_class=DishkaRoute)


class CreateProfileAPIRequest(BaseModel):
    """API request for creating the caller's profile."""

    username: str
    name: str | None = None


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    username: str | None = None
    profile_image: str | None = None  # data:image/...;base64,...
    remove_profile_image: bool = False


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: CreateProfileAPIRequest,
    create_profile_use_case: FromDishka[CreateProfileUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ProfileResponse:
    """Create the caller's profile after signup."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await create_profile_use_case.execute(
        CreateProfileRequest(
            identity=identity, username=request.username, name=request.name
        )
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    get_profile_use_case: FromDishka[GetProfileUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ProfileResponse:
    """The caller's own profile."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await get_profile_use_case.execute(GetProfileRequest(user_id=identity.id))


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    identity_provider: FromDishka[IdentityProvider],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ProfileResponse:
    """Change the caller's username or profile image."""
    identity = resolve_identity(identity_provider, auth_token, authorization)
    return await update_profile_use_case.execute(
        UpdateProfileRequest(
            user_id=identity.id,
            username=request.username,
            profile_image=request.profile_image,
            remove_profile_image=request.remove_profile_image,
        )
    )
