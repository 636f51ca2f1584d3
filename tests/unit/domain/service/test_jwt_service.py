"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from huddle.config import AuthSettings
from huddle.domain.error import UnauthenticatedError
from huddle.domain.service import IdentityProvider, JWTService
from huddle.domain.value import Identity
from huddle.util.error import TokenError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestJWTService:
    """Tests for token creation and verification."""

    @pytest.mark.asyncio
    async def test_round_trip_identity(self, unit_env):
        service = await unit_env.get(JWTService)
        identity = Identity(id="user-1", display_name="Ada", email="ada@example.com")

        token = service.create_token(identity)

        assert service.current_identity(token) == identity

    @pytest.mark.asyncio
    async def test_identity_provider_is_jwt(self, unit_env):
        provider = await unit_env.get(IdentityProvider)
        assert isinstance(provider, JWTService)

    def test_identity_provider_is_abstract(self):
        with pytest.raises(TypeError):
            IdentityProvider()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token(self, unit_env, token):
        service = await unit_env.get(JWTService)

        with pytest.raises(UnauthenticatedError):
            service.current_identity(token)

    def test_wrong_secret(self):
        issuer = JWTService(AuthSettings(jwt_secret="issuer-secret"))
        verifier = JWTService(AuthSettings(jwt_secret="other-secret"))
        token = issuer.create_token(Identity(id="user-1"))

        with pytest.raises(TokenError, match="Invalid token"):
            verifier.verify_token(token)
        with pytest.raises(UnauthenticatedError, match="Invalid token"):
            verifier.current_identity(token)

    def test_expired_token(self):
        settings = AuthSettings(jwt_secret="secret")
        service = JWTService(settings)
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(UnauthenticatedError, match="expired"):
            service.current_identity(token)
