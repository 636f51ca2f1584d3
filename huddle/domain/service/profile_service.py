"""Profile domain service."""

from datetime import datetime, timezone
from typing import Iterable

import logfire
from pydantic import ValidationError as PydanticValidationError

from huddle.config import ProfileSettings
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.model import DisplayProfile, Profile
from huddle.domain.repository import ProfileRepository
from huddle.domain.value import Identity, ImageDataUrl, UserId, Username

from .base import Service


def _first_error(e: PydanticValidationError) -> str:
    return e.errors()[0]["msg"].removeprefix("Value error, ")


class ProfileService(Service):
    """Domain service for profiles and their display projections."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        profile_settings: ProfileSettings,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            profile_settings: Placeholder name and image limits
        """
        self.profile_repository = profile_repository
        self.profile_settings = profile_settings

    def parse_username(self, username: str) -> Username:
        """Validate a username.

        Raises:
            ValidationError: If the username is too short or too long
        """
        try:
            return Username(username)
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e)) from e

    def parse_image(self, data_url: str) -> ImageDataUrl:
        """Validate an inline profile image.

        Raises:
            ValidationError: If it is not a base64 image data URL or too large
        """
        try:
            image = ImageDataUrl(data_url)
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e)) from e

        if image.size_bytes > self.profile_settings.max_image_bytes:
            raise ValidationError(
                f"Profile image exceeds {self.profile_settings.max_image_bytes} bytes"
            )
        return image

    async def create_profile(
        self, identity: Identity, username: str, name: str | None = None
    ) -> Profile:
        """Create the profile of a newly signed-up identity.

        Args:
            identity: Authenticated identity; its ID becomes the profile ID
            username: Chosen username
            name: Display name, defaults to the identity's display name

        Returns:
            Created profile

        Raises:
            ValidationError: If the username is invalid or a profile exists
        """
        with logfire.span("profile_service.create_profile", user_id=identity.id):
            now = datetime.now(timezone.utc)
            profile = Profile(
                id=UserId(identity.id),
                username=self.parse_username(username),
                name=name or identity.display_name,
                email=identity.email,
                created_at=now,
                updated_at=now,
            )
            saved = await self.profile_repository.create(profile)
            logfire.info(
                "Profile created", user_id=identity.id, username=saved.username.root
            )
            return saved

    async def get_profile(self, user_id: UserId) -> Profile:
        """Get a profile.

        Raises:
            NotFoundError: If the user has no profile
        """
        with logfire.span("profile_service.get_profile", user_id=user_id):
            profile = await self.profile_repository.find_by_id(user_id)
            if not profile:
                logfire.warn("Profile not found", user_id=user_id)
                raise NotFoundError("Profile", user_id)
            return profile

    async def find_profile(self, user_id: UserId) -> Profile | None:
        """Get a profile if it exists."""
        return await self.profile_repository.find_by_id(user_id)

    async def update_username(self, user_id: UserId, username: str) -> Profile:
        """Change the username of a profile.

        Messages keep the username they were sent with.

        Raises:
            ValidationError: If the username is invalid
            NotFoundError: If the user has no profile
        """
        with logfire.span("profile_service.update_username", user_id=user_id):
            parsed = self.parse_username(username)
            profile = await self.profile_repository.update(
                user_id, {"username": parsed.root}, datetime.now(timezone.utc)
            )
            logfire.info("Username updated", user_id=user_id, username=parsed.root)
            return profile

    async def update_profile_image(
        self, user_id: UserId, data_url: str | None
    ) -> Profile:
        """Replace or clear the profile image.

        Args:
            user_id: Profile owner
            data_url: Base64 image data URL, or None to remove the image

        Raises:
            ValidationError: If the image is malformed or too large
            NotFoundError: If the user has no profile
        """
        with logfire.span("profile_service.update_profile_image", user_id=user_id):
            image = self.parse_image(data_url) if data_url else None
            profile = await self.profile_repository.update(
                user_id,
                {"profile_image": image.root if image else None},
                datetime.now(timezone.utc),
            )
            logfire.info(
                "Profile image updated",
                user_id=user_id,
                size_bytes=image.size_bytes if image else 0,
            )
            return profile

    def placeholder(self, user_id: UserId) -> DisplayProfile:
        """Display profile for a user whose profile is unavailable."""
        name = self.profile_settings.placeholder_name
        return DisplayProfile(id=user_id, username=name, name=name, is_placeholder=True)

    async def get_display_profiles(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, DisplayProfile]:
        """Batch lookup of display profiles.

        Missing profiles, and every profile of a failed lookup, degrade to a
        placeholder so that lists of requests, messages or participants
        still render.

        Args:
            user_ids: Users to look up

        Returns:
            Display profile for every requested user
        """
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        with logfire.span("profile_service.get_display_profiles", count=len(ids)):
            try:
                profiles = await self.profile_repository.find_many(ids)
            except Exception as e:
                logfire.error(
                    "Profile lookup failed, using placeholders",
                    count=len(ids),
                    error=str(e),
                )
                profiles = {}

            result = {}
            for user_id in ids:
                profile = profiles.get(user_id)
                if profile is None:
                    result[user_id] = self.placeholder(user_id)
                    continue
                result[user_id] = DisplayProfile(
                    id=profile.id,
                    username=profile.username.root,
                    name=profile.display_name,
                    profile_image=profile.profile_image.root
                    if profile.profile_image
                    else None,
                )
            return result

    async def username_snapshot(
        self, user_id: UserId, display_name: str | None = None
    ) -> str:
        """Username to stamp on a new message.

        Falls back to the identity display name, then to the placeholder.
        """
        profiles = await self.get_display_profiles([user_id])
        profile = profiles[user_id]
        if not profile.is_placeholder:
            return profile.username
        return display_name or self.profile_settings.placeholder_name
