"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from wildlanka.adapter.identity import JWTIdentityVerifier, UserInfoIdentityVerifier
from wildlanka.config import Settings
from wildlanka.domain.service import IdentityVerifier
from wildlanka.util.di.base import ProviderBase
from wildlanka.util.error import ConfigurationError

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


class IdentityProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_verifier(self, settings: Settings) -> IdentityVerifier:
        """Provide the verifier selected by ``AUTH__IDENTITY_SOURCE``.

        Returns:
            Userinfo-backed or local JWT verifier

        Raises:
            ConfigurationError: If local JWT verification would use the
                default secret outside development and test
        """
        auth = settings.auth
        if auth.identity_source == "jwt":
            if auth.jwt_secret == DEFAULT_JWT_SECRET and not settings.expose_error_details:
                raise ConfigurationError(
                    "AUTH__JWT_SECRET must be set when AUTH__IDENTITY_SOURCE=jwt"
                )
            return JWTIdentityVerifier(auth_settings=auth)

        return UserInfoIdentityVerifier(
            userinfo_url=auth.userinfo_url,
            role_claim=auth.role_claim,
            timeout=auth.userinfo_timeout_seconds,
        )
