"""Reconcile chat participants use case."""

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import AccessService, MembershipService
from huddle.domain.value import ActivityId, UserId


class ReconcileParticipantsRequest(BaseModel):
    """Reconcile participants request."""

    activity_id: str
    actor_id: str  # Must be the activity host


class ReconcileParticipantsResponse(BaseModel):
    """Reconcile participants response."""

    chat_id: str
    participant_ids: list[str]
    participant_count: int


class ReconcileParticipantsUseCase(BaseUseCase):
    """Use case for repairing a chat after a failed accept."""

    def __init__(self, membership_service: MembershipService) -> None:
        self.membership_service = membership_service

    async def execute(
        self, request: ReconcileParticipantsRequest
    ) -> ReconcileParticipantsResponse:
        chat = await self.membership_service.reconcile_participants(
            ActivityId(request.activity_id), UserId(request.actor_id)
        )
        return ReconcileParticipantsResponse(
            chat_id=chat.id,
            participant_ids=sorted(chat.participants),
            participant_count=AccessService.participant_count(chat),
        )
