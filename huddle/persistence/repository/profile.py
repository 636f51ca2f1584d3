"""Entity store implementation of Profile repository."""

from datetime import datetime
from typing import Any, Optional

from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.model import Profile
from huddle.domain.repository import ProfileRepository
from huddle.domain.value import UserId
from huddle.persistence.error import DuplicateRecordError, RecordNotFoundError
from huddle.persistence.mappers import document_to_profile, profile_to_document
from huddle.persistence.store import Collection, EntityStore


class StoreProfileRepository(ProfileRepository):
    """Profile repository backed by the entity store."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize repository with the entity store.

        Args:
            store: Entity store
        """
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        doc = await self.store.get(Collection.PROFILES, user_id)
        return document_to_profile(doc) if doc else None

    async def find_many(self, user_ids: list[UserId]) -> dict[UserId, Profile]:
        docs = await self.store.get_many(Collection.PROFILES, user_ids)
        return {UserId(uid): document_to_profile(doc) for uid, doc in docs.items()}

    async def create(self, profile: Profile) -> Profile:
        try:
            doc = await self.store.create(
                Collection.PROFILES, profile_to_document(profile), record_id=profile.id
            )
        except DuplicateRecordError:
            raise ValidationError(f"Profile already exists for user {profile.id}")
        return document_to_profile(doc)

    async def update(
        self, user_id: UserId, changes: dict[str, Any], updated_at: datetime
    ) -> Profile:
        try:
            doc = await self.store.update(
                Collection.PROFILES,
                user_id,
                {**changes, "updated_at": updated_at.isoformat()},
            )
        except RecordNotFoundError:
            raise NotFoundError("Profile", user_id)
        return document_to_profile(doc)
