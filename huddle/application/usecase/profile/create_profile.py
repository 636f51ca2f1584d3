"""Create profile use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import ProfileService
from huddle.domain.value import Identity

from .common import ProfileResponse


class CreateProfileRequest(BaseModel):
    """Create profile request, sent once after signup."""

    identity: Identity
    username: str
    name: str | None = None


class CreateProfileUseCase(BaseUseCase):
    """Use case for creating the profile of a new identity."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize create profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: CreateProfileRequest) -> ProfileResponse:
        """Create the profile.

        Raises:
            ValidationError: If the username is invalid or a profile exists
        """
        profile = await self.profile_service.create_profile(
            request.identity, request.username, request.name
        )
        return ProfileResponse.from_profile(profile)
