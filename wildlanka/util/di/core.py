"""Configuration providers."""

from dishka import Scope, provide

from wildlanka.config import AuthSettings, Settings
from wildlanka.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings, read once per container from the environment."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth
