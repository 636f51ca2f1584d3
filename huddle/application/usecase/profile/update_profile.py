"""Update profile use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import ProfileService
from huddle.domain.value import UserId

from .common import ProfileResponse


class UpdateProfileRequest(BaseModel):
    """Update profile request.

    Only the fields that are set are changed.
    """

    user_id: str
    username: str | None = None
    profile_image: str | None = None  # Base64 image data URL
    remove_profile_image: bool = False


class UpdateProfileUseCase(BaseUseCase):
    """Use case for a user editing their own profile."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize update profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: UpdateProfileRequest) -> ProfileResponse:
        """Apply the requested changes.

        Raises:
            NotFoundError: If the user has no profile
            ValidationError: If the username or image is invalid
        """
        user_id = UserId(request.user_id)

        if request.username is not None:
            await self.profile_service.update_username(user_id, request.username)

        if request.remove_profile_image:
            await self.profile_service.update_profile_image(user_id, None)
        elif request.profile_image is not None:
            await self.profile_service.update_profile_image(
                user_id, request.profile_image
            )

        profile = await self.profile_service.get_profile(user_id)
        return ProfileResponse.from_profile(profile)
