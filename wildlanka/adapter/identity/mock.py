"""Mock identity verifier for testing."""

from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.service.auth_service import IdentityVerifier
from wildlanka.domain.value import IdentityAssertion


class MockIdentityVerifier(IdentityVerifier):
    """Maps opaque test tokens to identity assertions.

    Tokens that were never registered are rejected. No network calls.
    """

    def __init__(self) -> None:
        self._assertions: dict[str, IdentityAssertion] = {}

    def register(self, token: str, assertion: IdentityAssertion) -> None:
        """Make a token resolve to the given assertion."""
        self._assertions[token] = assertion

    def clear(self) -> None:
        self._assertions.clear()

    async def verify(self, token: str) -> IdentityAssertion:
        assertion = self._assertions.get(token)
        if assertion is None:
            raise AuthenticationRequiredError()
        return assertion
