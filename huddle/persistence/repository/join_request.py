"""Entity store implementation of JoinRequest repository."""

from datetime import datetime
from typing import Optional
from uuid import NAMESPACE_URL, uuid5

from huddle.domain.error import DuplicateRequestError, InvalidTransitionError, NotFoundError
from huddle.domain.model import JoinRequest
from huddle.domain.repository import JoinRequestRepository, SnapshotObserver, Subscription
from huddle.domain.value import ActivityId, JoinRequestId, RequestStatus, UserId
from huddle.persistence.error import (
    ConflictError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from huddle.persistence.mappers import document_to_join_request
from huddle.persistence.store import Collection, EntityStore


def join_request_id(activity_id: ActivityId, user_id: UserId) -> JoinRequestId:
    """Deterministic request ID for an (activity, user) pair.

    Creating with this ID is create-if-absent, which makes the uniqueness
    rule atomic in the store.
    """
    return JoinRequestId(uuid5(NAMESPACE_URL, f"huddle:{activity_id}:{user_id}").hex)


class StoreJoinRequestRepository(JoinRequestRepository):
    """JoinRequest repository backed by the entity store."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize repository with the entity store.

        Args:
            store: Entity store
        """
        self.store = store

    async def find_by_id(self, request_id: JoinRequestId) -> Optional[JoinRequest]:
        doc = await self.store.get(Collection.JOIN_REQUESTS, request_id)
        return document_to_join_request(doc) if doc else None

    async def find_by_activity_and_user(
        self, activity_id: ActivityId, user_id: UserId
    ) -> Optional[JoinRequest]:
        docs = await self.store.query(
            Collection.JOIN_REQUESTS,
            where={"activity_id": activity_id, "user_id": user_id},
        )
        return document_to_join_request(docs[0]) if docs else None

    async def find_by_activity(
        self, activity_id: ActivityId, status: RequestStatus | None = None
    ) -> list[JoinRequest]:
        where = {"activity_id": activity_id}
        if status is not None:
            where["status"] = status.value
        docs = await self.store.query(
            Collection.JOIN_REQUESTS, where=where, order_by=("created_at", "id")
        )
        return [document_to_join_request(doc) for doc in docs]

    async def find_by_user(self, user_id: UserId) -> list[JoinRequest]:
        docs = await self.store.query(
            Collection.JOIN_REQUESTS,
            where={"user_id": user_id},
            order_by=("created_at", "id"),
        )
        return [document_to_join_request(doc) for doc in docs]

    async def create_pending(
        self, activity_id: ActivityId, user_id: UserId
    ) -> JoinRequest:
        try:
            doc = await self.store.create(
                Collection.JOIN_REQUESTS,
                {
                    "activity_id": activity_id,
                    "user_id": user_id,
                    "status": RequestStatus.PENDING.value,
                    "decided_at": None,
                },
                record_id=join_request_id(activity_id, user_id),
            )
        except DuplicateRecordError:
            raise DuplicateRequestError(activity_id, user_id)
        return document_to_join_request(doc)

    async def transition(
        self,
        request_id: JoinRequestId,
        status: RequestStatus,
        decided_at: datetime,
    ) -> JoinRequest:
        try:
            doc = await self.store.update(
                Collection.JOIN_REQUESTS,
                request_id,
                {"status": status.value, "decided_at": decided_at.isoformat()},
                when={"status": RequestStatus.PENDING.value},
            )
        except RecordNotFoundError:
            raise NotFoundError("JoinRequest", request_id)
        except ConflictError:
            raise InvalidTransitionError(
                f"Join request {request_id} was decided concurrently"
            )
        return document_to_join_request(doc)

    async def delete(self, request_id: JoinRequestId) -> bool:
        try:
            await self.store.delete(Collection.JOIN_REQUESTS, request_id)
        except RecordNotFoundError:
            return False
        return True

    async def watch_activity(
        self,
        activity_id: ActivityId,
        on_change: SnapshotObserver[list[JoinRequest]],
    ) -> Subscription:
        async def deliver(docs):
            await on_change([document_to_join_request(doc) for doc in docs])

        return await self.store.subscribe(
            Collection.JOIN_REQUESTS,
            {"activity_id": activity_id},
            deliver,
            order_by=("created_at", "id"),
        )
