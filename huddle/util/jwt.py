"""Identity token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from huddle.config import AuthSettings
from huddle.util.error import TokenError


class TokenPayload(BaseModel):
    """Identity token payload."""

    sub: str  # Identity ID
    name: str | None = None
    email: str | None = None
    exp: datetime


def create_token(
    user_id: str,
    display_name: str | None,
    email: str | None,
    settings: AuthSettings,
) -> str:
    """Create a signed identity token.

    Args:
        user_id: Identity ID
        display_name: Display name
        email: Email address
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "sub": user_id,
        "name": display_name,
        "email": email,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode an identity token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        TokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")
