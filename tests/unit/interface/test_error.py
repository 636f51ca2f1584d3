"""Unit tests for the HTTP error mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from huddle.domain.error import (
    DomainError,
    DuplicateRequestError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PartialFailureError,
    UnauthenticatedError,
    ValidationError,
)
from huddle.interface.api.auth import bearer_token
from huddle.interface.error import register_error_handlers, status_code_for


@pytest.mark.parametrize(
    "error, code",
    [
        (UnauthenticatedError(), 401),
        (ForbiddenError("edit", "activity", "a1", "u1"), 403),
        (NotFoundError("Activity", "a1"), 404),
        (DuplicateRequestError("a1", "u1"), 409),
        (InvalidTransitionError("Join request r1 is already accepted"), 409),
        (ValidationError("Title is required"), 422),
        (PartialFailureError("end_activity", "delete_chat", "boom"), 503),
        (DomainError("other"), 400),
    ],
)
def test_status_code_for(error, code):
    assert status_code_for(error) == code


def test_handler_renders_partial_failure():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom():
        raise PartialFailureError("end_activity", "delete_messages", "store down")

    response = TestClient(app).get("/boom")

    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "PartialFailureError"
    assert body["step"] == "delete_messages"
    assert "delete_messages" in body["detail"]


@pytest.mark.parametrize(
    "header, token",
    [
        ("Bearer abc.def", "abc.def"),
        ("bearer  abc.def ", "abc.def"),
        ("Basic dXNlcg==", None),
        ("Bearer ", None),
        (None, None),
    ],
)
def test_bearer_token(header, token):
    assert bearer_token(header) == token
