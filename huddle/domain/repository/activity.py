"""Activity repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from huddle.domain.model.activity import Activity
from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, UserId


class ActivityRepository(ABC):
    """Repository for Activity entity.

    Defines the contract for activity persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, activity_id: ActivityId) -> Optional[Activity]:
        """Find an activity by ID.

        Args:
            activity_id: The activity's unique identifier

        Returns:
            The activity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(self, activity_ids: list[ActivityId]) -> dict[ActivityId, Activity]:
        """Batch lookup of activities.

        Args:
            activity_ids: Activity IDs

        Returns:
            Mapping of ID to activity for those that exist
        """
        pass

    @abstractmethod
    async def find_active_by_host(self, host_id: UserId) -> list[Activity]:
        """Find the activities a user hosts that have not ended.

        Args:
            host_id: The host's user ID

        Returns:
            Active activities, oldest first
        """
        pass

    @abstractmethod
    async def create(
        self,
        host_id: UserId,
        title: str,
        description: Optional[str],
        image_url: Optional[str],
        max_participants: int,
    ) -> Activity:
        """Create an activity; the store assigns ID and timestamps."""
        pass

    @abstractmethod
    async def update_details(
        self,
        activity_id: ActivityId,
        title: str,
        description: Optional[str],
        image_url: Optional[str],
        updated_at: datetime,
    ) -> Activity:
        """Patch the editable fields of an activity.

        Raises:
            NotFoundError: If the activity does not exist
        """
        pass

    @abstractmethod
    async def mark_ended(self, activity_id: ActivityId, ended_at: datetime) -> Activity:
        """Set ended_at unless it is already set.

        Returns:
            The activity, carrying the first ended_at ever written

        Raises:
            NotFoundError: If the activity does not exist
        """
        pass

    @abstractmethod
    async def delete(self, activity_id: ActivityId) -> bool:
        """Hard-delete an activity.

        Returns:
            True if deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def watch(
        self,
        activity_id: ActivityId,
        on_change: SnapshotObserver[Optional[Activity]],
    ) -> Subscription:
        """Subscribe to an activity; None is delivered once it is deleted."""
        pass
