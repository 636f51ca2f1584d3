"""Entity store implementation of Activity repository."""

from datetime import datetime
from typing import Optional

from huddle.domain.error import NotFoundError
from huddle.domain.model import Activity
from huddle.domain.repository import ActivityRepository, SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, UserId
from huddle.persistence.error import ConflictError, RecordNotFoundError
from huddle.persistence.mappers import document_to_activity
from huddle.persistence.store import Collection, EntityStore


class StoreActivityRepository(ActivityRepository):
    """Activity repository backed by the entity store."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize repository with the entity store.

        Args:
            store: Entity store
        """
        self.store = store

    async def find_by_id(self, activity_id: ActivityId) -> Optional[Activity]:
        doc = await self.store.get(Collection.ACTIVITIES, activity_id)
        return document_to_activity(doc) if doc else None

    async def find_many(
        self, activity_ids: list[ActivityId]
    ) -> dict[ActivityId, Activity]:
        docs = await self.store.get_many(Collection.ACTIVITIES, activity_ids)
        return {
            ActivityId(record_id): document_to_activity(doc)
            for record_id, doc in docs.items()
        }

    async def find_active_by_host(self, host_id: UserId) -> list[Activity]:
        docs = await self.store.query(
            Collection.ACTIVITIES,
            where={"host_id": host_id, "ended_at": None},
            order_by=("created_at", "id"),
        )
        return [document_to_activity(doc) for doc in docs]

    async def create(
        self,
        host_id: UserId,
        title: str,
        description: Optional[str],
        image_url: Optional[str],
        max_participants: int,
    ) -> Activity:
        doc = await self.store.create(
            Collection.ACTIVITIES,
            {
                "host_id": host_id,
                "title": title,
                "description": description,
                "image_url": image_url,
                "max_participants": max_participants,
                "ended_at": None,
            },
        )
        return document_to_activity(doc)

    async def update_details(
        self,
        activity_id: ActivityId,
        title: str,
        description: Optional[str],
        image_url: Optional[str],
        updated_at: datetime,
    ) -> Activity:
        try:
            doc = await self.store.update(
                Collection.ACTIVITIES,
                activity_id,
                {
                    "title": title,
                    "description": description,
                    "image_url": image_url,
                    "updated_at": updated_at.isoformat(),
                },
            )
        except RecordNotFoundError:
            raise NotFoundError("Activity", activity_id)
        return document_to_activity(doc)

    async def mark_ended(self, activity_id: ActivityId, ended_at: datetime) -> Activity:
        try:
            doc = await self.store.update(
                Collection.ACTIVITIES,
                activity_id,
                {"ended_at": ended_at.isoformat()},
                when={"ended_at": None},
            )
        except RecordNotFoundError:
            raise NotFoundError("Activity", activity_id)
        except ConflictError:
            # Already ended by an earlier run; keep the first timestamp
            doc = await self.store.get(Collection.ACTIVITIES, activity_id)
            if doc is None:
                raise NotFoundError("Activity", activity_id)
        return document_to_activity(doc)

    async def delete(self, activity_id: ActivityId) -> bool:
        try:
            await self.store.delete(Collection.ACTIVITIES, activity_id)
        except RecordNotFoundError:
            return False
        return True

    async def watch(
        self,
        activity_id: ActivityId,
        on_change: SnapshotObserver[Optional[Activity]],
    ) -> Subscription:
        async def deliver(doc):
            await on_change(document_to_activity(doc) if doc else None)

        return await self.store.subscribe(Collection.ACTIVITIES, activity_id, deliver)
