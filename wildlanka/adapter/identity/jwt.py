"""Identity verification of locally signed ID tokens."""

import logfire

from wildlanka.adapter.identity.claims import assertion_from_claims
from wildlanka.config import AuthSettings
from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.service.auth_service import IdentityVerifier
from wildlanka.domain.value import IdentityAssertion
from wildlanka.util.jwt import JWTError, verify_token


class JWTIdentityVerifier(IdentityVerifier):
    """Verifies ID tokens with the configured key, without calling the provider."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT verifier.

        Args:
            auth_settings: Authentication settings (key, algorithm, audience)
        """
        self.auth_settings = auth_settings

    async def verify(self, token: str) -> IdentityAssertion:
        """Verify and decode an ID token.

        Args:
            token: Bearer token sent by the client

        Returns:
            Identity claims carried by the token

        Raises:
            AuthenticationRequiredError: If the token is expired or invalid
        """
        try:
            claims = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("ID token rejected", error=str(e))
            raise AuthenticationRequiredError() from e

        return assertion_from_claims(claims, self.auth_settings.role_claim)
