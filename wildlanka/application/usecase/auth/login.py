"""Login use case.

Turns a verified identity into a created or refreshed account. The role is
resolved only when the account is created; repeat logins refresh profile
fields and login metadata and never touch the role.
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import BaseModel

from wildlanka.application.usecase.auth.account_view import AccountView
from wildlanka.domain.error import (
    AuthenticationRequiredError,
    DuplicateAccountError,
    NotFoundError,
    PersistenceError,
)
from wildlanka.domain.model import Account, AuthMetadata, LoginUpdate, Preferences
from wildlanka.domain.service import AccountService, RoleResolver
from wildlanka.domain.value import (
    AccountId,
    AccountStatus,
    ClientContext,
    IdentityAssertion,
)


class LoginRequest(BaseModel):
    """Login request for an authenticated caller."""

    assertion: IdentityAssertion
    client: ClientContext = ClientContext()


class LoginUseCase:
    """Use case for reconciling a login with the local account."""

    def __init__(
        self,
        account_service: AccountService,
        role_resolver: RoleResolver,
    ) -> None:
        """Initialize login use case.

        Args:
            account_service: Account domain service
            role_resolver: Role resolver used for first logins
        """
        self.account_service = account_service
        self.role_resolver = role_resolver

    async def execute(self, request: LoginRequest) -> AccountView:
        """Execute the login flow.

        Steps:
        1. Reject assertions without a subject before touching storage
        2. Look up the account by subject (exact match only)
        3. If absent: resolve the role and create the account
        4. If present: merge profile fields and bump login metadata
        5. Return the account view

        Args:
            request: Login request with identity and client context

        Returns:
            View of the created or updated account

        Raises:
            AuthenticationRequiredError: If the assertion has no subject
            PersistenceError: If the account store fails
        """
        assertion = request.assertion
        if not assertion.has_subject:
            logfire.warn("Login rejected - assertion without subject")
            raise AuthenticationRequiredError()

        existing = await self.account_service.find_by_subject_id(assertion.subject_id)

        with logfire.span(
            "login_account",
            subject_id=assertion.subject_id,
            is_new_user=existing is None,
        ):
            if existing is not None:
                account = await self._record_repeat_login(assertion, request.client)
            else:
                try:
                    account = await self._create_account(assertion, request.client)
                except DuplicateAccountError as e:
                    # Another request created the account first
                    logfire.warn(
                        "Concurrent first login, retrying as repeat login",
                        subject_id=assertion.subject_id,
                        error=str(e),
                    )
                    account = await self._record_repeat_login(
                        assertion, request.client
                    )

            return AccountView.from_account(account)

    async def _create_account(
        self, assertion: IdentityAssertion, client: ClientContext
    ) -> Account:
        """Create the account for a first login."""
        if not assertion.email:
            logfire.warn(
                "Login rejected - first login without email",
                subject_id=assertion.subject_id,
            )
            raise AuthenticationRequiredError()

        role = await self.role_resolver.resolve_role(assertion, None)

        now = datetime.now(timezone.utc)
        account = Account(
            id=AccountId(uuid4()),
            subject_id=assertion.subject_id,
            email=assertion.email,
            name=assertion.name or assertion.nickname or assertion.email,
            picture=assertion.picture,
            nickname=assertion.nickname,
            given_name=assertion.given_name,
            family_name=assertion.family_name,
            locale=assertion.locale,
            email_verified=bool(assertion.email_verified),
            role=role,
            auth_metadata=AuthMetadata(
                last_login=now,
                login_count=1,
                last_ip=client.ip,
                user_agent=client.user_agent,
            ),
            status=AccountStatus.ACTIVE,
            preferences=Preferences(language=assertion.locale or "en"),
            created_at=now,
            updated_at=now,
        )
        return await self.account_service.create(account)

    async def _record_repeat_login(
        self, assertion: IdentityAssertion, client: ClientContext
    ) -> Account:
        """Refresh an existing account from the login."""
        login = LoginUpdate(
            name=assertion.name,
            email=assertion.email,
            picture=assertion.picture,
            nickname=assertion.nickname,
            given_name=assertion.given_name,
            family_name=assertion.family_name,
            locale=assertion.locale,
            email_verified=assertion.email_verified,
            last_login=datetime.now(timezone.utc),
            last_ip=client.ip,
            user_agent=client.user_agent,
        )
        try:
            return await self.account_service.record_login(
                assertion.subject_id, login
            )
        except NotFoundError as e:
            # Never fall back to creating an account here
            raise PersistenceError(
                f"Account for subject {assertion.subject_id} could not be loaded"
            ) from e
