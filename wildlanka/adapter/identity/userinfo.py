"""Identity verification through the provider's userinfo endpoint."""

from typing import Any

import httpx
import logfire

from wildlanka.adapter.error import ProviderError
from wildlanka.adapter.identity.claims import assertion_from_claims
from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.service.auth_service import IdentityVerifier
from wildlanka.domain.value import IdentityAssertion


class UserInfoIdentityVerifier(IdentityVerifier):
    """Asks the identity provider who a bearer token belongs to.

    The provider is trusted to have validated the token; a response without
    both ``sub`` and ``email`` is rejected.
    """

    def __init__(
        self,
        userinfo_url: str,
        role_claim: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize userinfo verifier.

        Args:
            userinfo_url: Provider userinfo endpoint
            role_claim: Name of the namespaced role claim
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.userinfo_url = userinfo_url
        self.role_claim = role_claim
        self.timeout = timeout
        self.transport = transport

    async def verify(self, token: str) -> IdentityAssertion:
        """Verify a bearer token against the userinfo endpoint.

        Args:
            token: Bearer token sent by the client

        Returns:
            Identity claims for the token

        Raises:
            AuthenticationRequiredError: If the provider rejects the token
        """
        try:
            claims = await self._fetch_userinfo(token)
        except ProviderError as e:
            logfire.warn("Userinfo verification failed", error=str(e))
            raise AuthenticationRequiredError() from e

        if not claims.get("sub") or not claims.get("email"):
            logfire.warn(
                "Userinfo response missing required claims",
                has_sub=bool(claims.get("sub")),
                has_email=bool(claims.get("email")),
            )
            raise AuthenticationRequiredError()

        return assertion_from_claims(claims, self.role_claim)

    async def _fetch_userinfo(self, token: str) -> dict[str, Any]:
        """Fetch the userinfo document for a token.

        Raises:
            ProviderError: If the request fails or the response is unusable
        """
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {token}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Userinfo HTTP error", error=str(e))
            raise ProviderError(f"HTTP error fetching userinfo: {e}")

        if response.status_code != 200:
            logfire.warn(
                "Userinfo request rejected",
                status_code=response.status_code,
            )
            raise ProviderError(f"Userinfo request failed: {response.status_code}")

        try:
            result = response.json()
        except ValueError:
            raise ProviderError("Userinfo response is not JSON")

        if not isinstance(result, dict):
            raise ProviderError("Userinfo response is not an object")
        return result
