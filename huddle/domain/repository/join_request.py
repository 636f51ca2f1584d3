"""Join request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from huddle.domain.model.join_request import JoinRequest
from huddle.domain.repository.subscription import SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, JoinRequestId, RequestStatus, UserId


class JoinRequestRepository(ABC):
    """Repository for JoinRequest entity.

    Implementations must enforce the one-request-per-(activity, user) rule
    atomically and apply status transitions as conditional writes.
    """

    @abstractmethod
    async def find_by_id(self, request_id: JoinRequestId) -> Optional[JoinRequest]:
        """Find a join request by ID."""
        pass

    @abstractmethod
    async def find_by_activity_and_user(
        self, activity_id: ActivityId, user_id: UserId
    ) -> Optional[JoinRequest]:
        """Find the request a user made for an activity, if any."""
        pass

    @abstractmethod
    async def find_by_activity(
        self, activity_id: ActivityId, status: RequestStatus | None = None
    ) -> list[JoinRequest]:
        """Find the requests of an activity, optionally filtered by status."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[JoinRequest]:
        """Find every request a user has made."""
        pass

    @abstractmethod
    async def create_pending(
        self, activity_id: ActivityId, user_id: UserId
    ) -> JoinRequest:
        """Create a pending request.

        Raises:
            DuplicateRequestError: If the user already has a request for
                this activity, including one created concurrently
        """
        pass

    @abstractmethod
    async def transition(
        self,
        request_id: JoinRequestId,
        status: RequestStatus,
        decided_at: datetime,
    ) -> JoinRequest:
        """Move a request out of PENDING, only if it is still pending.

        Raises:
            NotFoundError: If the request does not exist
            InvalidTransitionError: If the stored request is no longer pending
        """
        pass

    @abstractmethod
    async def delete(self, request_id: JoinRequestId) -> bool:
        """Hard-delete a request.

        Returns:
            True if deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def watch_activity(
        self,
        activity_id: ActivityId,
        on_change: SnapshotObserver[list[JoinRequest]],
    ) -> Subscription:
        """Subscribe to the requests of an activity."""
        pass
