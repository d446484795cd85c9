"""Application layer DI providers."""

from dishka import Scope, provide

from wildlanka.application.usecase.auth import (
    GetProfileUseCase,
    LoginUseCase,
    UpdateProfileUseCase,
)
from wildlanka.domain.service import AccountService, RoleResolver
from wildlanka.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        account_service: AccountService,
        role_resolver: RoleResolver,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            account_service=account_service,
            role_resolver=role_resolver,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, account_service: AccountService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(account_service=account_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, account_service: AccountService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(account_service=account_service)
