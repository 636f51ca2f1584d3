"""End-to-end tests for profile endpoints."""

import pytest

from tests.conftest import image_data_url
from tests.e2e.helpers import auth, make_client, token_for


@pytest.fixture
def client():
    """Create test client with test container."""
    return make_client()


class TestProfileEndpoints:
    """End-to-end tests for the profile API."""

    def test_me_without_profile(self, client):
        response = client.get("/profiles/me", headers=auth("alice"))

        assert response.status_code == 404

    def test_signup_and_update(self, client):
        created = client.post(
            "/profiles", json={"username": "alice_w"}, headers=auth("alice", "Alice W")
        )
        updated = client.patch(
            "/profiles/me",
            json={"username": "alice_x", "profile_image": image_data_url()},
            headers=auth("alice"),
        )
        me = client.get("/profiles/me", headers=auth("alice"))

        assert created.status_code == 201
        assert created.json()["name"] == "Alice W"
        assert updated.status_code == 200
        assert me.json()["username"] == "alice_x"
        assert me.json()["profile_image"].startswith("data:image/png;base64,")

    def test_auth_cookie_accepted(self, client):
        client.cookies.set("auth_token", token_for("alice"))

        response = client.post("/profiles", json={"username": "alice_w"})

        assert response.status_code == 201
        assert response.json()["user_id"] == "alice"

    def test_duplicate_signup(self, client):
        client.post("/profiles", json={"username": "alice_w"}, headers=auth("alice"))

        response = client.post(
            "/profiles", json={"username": "alice_2"}, headers=auth("alice")
        )

        assert response.status_code == 422

    def test_invalid_image(self, client):
        client.post("/profiles", json={"username": "alice_w"}, headers=auth("alice"))

        response = client.patch(
            "/profiles/me",
            json={"profile_image": "https://example.com/me.png"},
            headers=auth("alice"),
        )

        assert response.status_code == 422
