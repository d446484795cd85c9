"""Mock identity providers for testing."""

from dishka import Scope, alias, provide

from wildlanka.adapter.identity import MockIdentityVerifier
from wildlanka.domain.service import IdentityVerifier
from wildlanka.util.di.infrastructure.identity import IdentityProvider


class MockIdentityProvider(IdentityProvider):
    """Mock identity provider resolving registered test tokens."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_identity_verifier(self) -> MockIdentityVerifier:
        """Provide mock identity verifier."""
        return MockIdentityVerifier()

    identity_verifier = alias(source=MockIdentityVerifier, provides=IdentityVerifier)
