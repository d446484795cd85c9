"""Authentication domain service."""

import logfire

from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.value import IdentityAssertion

from .base import Service


class IdentityVerifier:
    """Generic interface for turning a bearer credential into identity claims."""

    async def verify(self, token: str) -> IdentityAssertion:
        """Verify a bearer token.

        Args:
            token: Bearer token sent by the client

        Returns:
            Identity claims carried by the token

        Raises:
            AuthenticationRequiredError: If the token is not acceptable
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for authenticating API requests."""

    def __init__(self, identity_verifier: IdentityVerifier) -> None:
        """Initialize auth service.

        Args:
            identity_verifier: Verifier for bearer credentials
        """
        self.identity_verifier = identity_verifier

    async def authenticate(self, token: str | None) -> IdentityAssertion:
        """Authenticate a bearer token.

        Args:
            token: Bearer token, None if the request carried none

        Returns:
            Verified identity claims

        Raises:
            AuthenticationRequiredError: If the token is missing or rejected
        """
        if not token:
            logfire.info("Request without bearer token")
            raise AuthenticationRequiredError()

        with logfire.span("auth_service.authenticate"):
            try:
                assertion = await self.identity_verifier.verify(token)
            except AuthenticationRequiredError as e:
                logfire.warn("Bearer token rejected", reason=str(e))
                raise

            logfire.info(
                "Request authenticated",
                subject_id=assertion.subject_id,
                email=assertion.email,
            )
            return assertion
