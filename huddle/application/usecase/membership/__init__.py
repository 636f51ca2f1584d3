"""Membership use cases."""

from .decide_request import (
    DecideRequestRequest,
    DecideRequestResponse,
    DecideRequestUseCase,
)
from .reconcile_participants import (
    ReconcileParticipantsRequest,
    ReconcileParticipantsResponse,
    ReconcileParticipantsUseCase,
)
from .request_to_join import (
    RequestToJoinRequest,
    RequestToJoinResponse,
    RequestToJoinUseCase,
)

__all__ = [
    "DecideRequestRequest",
    "DecideRequestResponse",
    "DecideRequestUseCase",
    "ReconcileParticipantsRequest",
    "ReconcileParticipantsResponse",
    "ReconcileParticipantsUseCase",
    "RequestToJoinRequest",
    "RequestToJoinResponse",
    "RequestToJoinUseCase",
]
