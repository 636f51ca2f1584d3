"""Identity token domain service."""

from abc import ABC, abstractmethod

import logfire

from huddle.config import AuthSettings
from huddle.domain.error import UnauthenticatedError
from huddle.domain.value import Identity
from huddle.util.error import TokenError
from huddle.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class IdentityProvider(ABC):
    """Source of the authenticated identity for a request."""

    @abstractmethod
    def current_identity(self, token: str | None) -> Identity:
        """Resolve the identity behind a credential.

        Args:
            token: Credential presented by the client (optional)

        Returns:
            Authenticated identity

        Raises:
            UnauthenticatedError: If no valid identity is available
        """
        pass


class JWTService(Service, IdentityProvider):
    """Domain service for identity tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity: Identity) -> str:
        """Create a signed token for an identity.

        Args:
            identity: Identity to encode

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=identity.id):
            token = create_token(
                identity.id, identity.display_name, identity.email, self.auth_settings
            )
            logfire.info("JWT token created", user_id=identity.id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            TokenError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.sub)
                return payload
            except TokenError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def current_identity(self, token: str | None) -> Identity:
        if not token:
            raise UnauthenticatedError()

        try:
            payload = self.verify_token(token)
        except TokenError as e:
            raise UnauthenticatedError(str(e)) from e

        return Identity(id=payload.sub, display_name=payload.name, email=payload.email)
