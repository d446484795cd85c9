"""Domain layer DI providers."""

from dishka import Scope, provide

from wildlanka.domain.repository import AccountRepository, StaffRecordStore
from wildlanka.domain.service import (
    STAFF_COLLECTIONS,
    AccountService,
    AuthService,
    IdentityVerifier,
    RoleResolver,
    SpecializedRoleSource,
)
from wildlanka.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, identity_verifier: IdentityVerifier) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(identity_verifier=identity_verifier)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_role_resolver(
        self,
        staff_stores: dict[str, StaffRecordStore],
        account_repository: AccountRepository,
    ) -> RoleResolver:
        """Provide role resolver wired to the staff stores in priority order.

        Args:
            staff_stores: Staff record stores keyed by collection
            account_repository: Account repository

        Returns:
            RoleResolver consulting every staff collection
        """
        sources = [
            SpecializedRoleSource(
                role=staff.role,
                store=staff_stores[staff.collection],
                email_field=staff.email_field,
            )
            for staff in STAFF_COLLECTIONS
        ]
        return RoleResolver(sources=sources, account_repository=account_repository)
