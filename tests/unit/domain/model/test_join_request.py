"""Unit tests for the join request state machine."""

from datetime import datetime, timezone

import pytest

from huddle.domain.error import InvalidTransitionError
from huddle.domain.model import JoinRequest
from huddle.domain.value import (
    ActivityId,
    JoinRequestId,
    RequestAction,
    RequestStatus,
    UserId,
)


def make_request(status: RequestStatus = RequestStatus.PENDING) -> JoinRequest:
    return JoinRequest(
        id=JoinRequestId("req-1"),
        activity_id=ActivityId("act-1"),
        user_id=UserId("alice"),
        status=status,
        created_at=datetime.now(timezone.utc),
    )


class TestResolve:
    """Tests for JoinRequest.resolve."""

    def test_new_request_is_pending(self):
        request = make_request()
        assert request.is_pending
        assert not request.is_accepted
        assert request.decided_at is None

    @pytest.mark.parametrize(
        "action, expected",
        [
            (RequestAction.ACCEPT, RequestStatus.ACCEPTED),
            (RequestAction.REJECT, RequestStatus.REJECTED),
        ],
    )
    def test_pending_request_resolves(self, action, expected):
        decided_at = datetime.now(timezone.utc)

        resolved = make_request().resolve(action, decided_at)

        assert resolved.status == expected
        assert resolved.decided_at == decided_at

    def test_resolve_does_not_mutate_original(self):
        request = make_request()
        request.resolve(RequestAction.ACCEPT, datetime.now(timezone.utc))
        assert request.is_pending

    @pytest.mark.parametrize(
        "terminal", [RequestStatus.ACCEPTED, RequestStatus.REJECTED]
    )
    @pytest.mark.parametrize("action", list(RequestAction))
    def test_terminal_request_cannot_change(self, terminal, action):
        """Accepted and rejected are terminal: no reversal, no re-decision."""
        request = make_request(terminal)

        with pytest.raises(InvalidTransitionError, match="already"):
            request.resolve(action, datetime.now(timezone.utc))
