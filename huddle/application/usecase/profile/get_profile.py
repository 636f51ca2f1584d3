"""Get profile use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import ProfileService
from huddle.domain.value import UserId

from .common import ProfileResponse


class GetProfileRequest(BaseModel):
    """Get profile request."""

    user_id: str


class GetProfileUseCase(BaseUseCase):
    """Use case for reading a user's own profile."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: GetProfileRequest) -> ProfileResponse:
        profile = await self.profile_service.get_profile(UserId(request.user_id))
        return ProfileResponse.from_profile(profile)
