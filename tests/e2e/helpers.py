"""Shared helpers for end-to-end tests."""

from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from huddle.config import Settings
from huddle.interface.api.app import create_app
from huddle.util.di.container import setup_di
from huddle.util.jwt import create_token
from tests.di import build_test_container


def make_client() -> TestClient:
    """Create test client backed by the in-memory store."""
    app_instance = create_app()
    test_container = build_test_container(None, FastapiProvider())
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


def token_for(user_id: str, name: str | None = None) -> str:
    """Identity token signed with the configured secret."""
    return create_token(user_id, name, None, Settings().auth)


def auth(user_id: str, name: str | None = None) -> dict[str, str]:
    """Bearer header for a user."""
    return {"Authorization": f"Bearer {token_for(user_id, name)}"}
