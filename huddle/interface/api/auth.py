"""Identity resolution for routes."""

from huddle.domain.service import IdentityProvider
from huddle.domain.value import Identity

_BEARER = "bearer "


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token of an ``Authorization: Bearer`` header."""
    if authorization and authorization.lower().startswith(_BEARER):
        return authorization[len(_BEARER) :].strip() or None
    return None


def resolve_identity(
    identity_provider: IdentityProvider,
    auth_token: str | None,
    authorization: str | None = None,
) -> Identity:
    """Identity of the caller from the auth cookie or a bearer header.

    Raises:
        UnauthenticatedError: If neither carries a valid token
    """
    return identity_provider.current_identity(auth_token or bearer_token(authorization))
