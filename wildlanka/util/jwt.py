"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from wildlanka.config import AuthSettings


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    claims: dict[str, Any], settings: AuthSettings, expires_in: timedelta | None = None
) -> str:
    """Create a signed ID token carrying the given claims.

    Used by tests and local tooling; production tokens come from the
    identity provider.

    Args:
        claims: Token claims (at least ``sub``)
        settings: Authentication settings
        expires_in: Lifetime of the token, one hour if omitted

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + (expires_in or timedelta(hours=1))

    payload = {**claims, "exp": expiry}
    if settings.jwt_audience:
        payload.setdefault("aud", settings.jwt_audience)
    if settings.jwt_issuer:
        payload.setdefault("iss", settings.jwt_issuer)

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> dict[str, Any]:
    """Verify and decode a signed ID token.

    Audience and issuer are checked only when configured.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Decoded claims

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={
                "verify_aud": settings.jwt_audience is not None,
                "require": ["sub", "exp"],
            },
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
