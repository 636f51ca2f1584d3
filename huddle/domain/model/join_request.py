"""Join request entity and its approval state machine."""

from datetime import datetime
from typing import Optional

from huddle.domain.error import InvalidTransitionError
from huddle.domain.model.common import DomainModel
from huddle.domain.value import (
    ActivityId,
    JoinRequestId,
    RequestAction,
    RequestStatus,
    UserId,
)


class JoinRequest(DomainModel):
    """A user's bid to participate in an activity.

    State machine:
    - initial state is PENDING
    - PENDING -> ACCEPTED or PENDING -> REJECTED, decided by the host
    - ACCEPTED and REJECTED are terminal (no reversal)

    At most one request exists per (activity_id, user_id).
    """

    id: JoinRequestId
    activity_id: ActivityId
    user_id: UserId
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime
    decided_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_accepted(self) -> bool:
        return self.status == RequestStatus.ACCEPTED

    def resolve(self, action: RequestAction, decided_at: datetime) -> "JoinRequest":
        """Apply a host decision.

        Args:
            action: Accept or reject
            decided_at: Time of the decision

        Returns:
            The request in its terminal state

        Raises:
            InvalidTransitionError: If the request is no longer pending
        """
        if not self.is_pending:
            raise InvalidTransitionError(
                f"Join request {self.id} is already {self.status.value}"
            )
        return self.model_copy(
            update={"status": action.resolved_status, "decided_at": decided_at}
        )
