"""Profile repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from huddle.domain.model.profile import Profile
from huddle.domain.value import UserId


class ProfileRepository(ABC):
    """Repository for Profile entity."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by its owner's identity ID."""
        pass

    @abstractmethod
    async def find_many(self, user_ids: list[UserId]) -> dict[UserId, Profile]:
        """Batch lookup of profiles in one round-trip.

        Args:
            user_ids: Identity IDs

        Returns:
            Mapping of ID to profile for those that exist
        """
        pass

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        """Create a profile keyed by the identity ID.

        Raises:
            ValidationError: If a profile already exists for this identity
        """
        pass

    @abstractmethod
    async def update(
        self, user_id: UserId, changes: dict[str, Any], updated_at: datetime
    ) -> Profile:
        """Patch profile fields.

        Raises:
            NotFoundError: If the profile does not exist
        """
        pass
