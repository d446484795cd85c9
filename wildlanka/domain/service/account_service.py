"""Account domain service."""

import logfire

from wildlanka.domain.error import NotFoundError
from wildlanka.domain.model.account import Account, LoginUpdate
from wildlanka.domain.repository import AccountRepository

from .base import Service


class AccountService(Service):
    """Domain service for account operations."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def find_by_subject_id(self, subject_id: str) -> Account | None:
        """Find an account by identity provider subject.

        Args:
            subject_id: Provider subject identifier

        Returns:
            Account if found, None otherwise
        """
        with logfire.span(
            "account_service.find_by_subject_id", subject_id=subject_id
        ):
            account = await self.account_repository.find_by_subject_id(subject_id)
            if account:
                logfire.info(
                    "Account found",
                    subject_id=subject_id,
                    account_id=str(account.id),
                    role=account.role.value,
                )
            else:
                logfire.info("Account not found", subject_id=subject_id)
            return account

    async def get_by_subject_id(self, subject_id: str) -> Account:
        """Get an account by identity provider subject.

        Args:
            subject_id: Provider subject identifier

        Returns:
            Account entity

        Raises:
            NotFoundError: If no account has this subject
        """
        account = await self.find_by_subject_id(subject_id)
        if not account:
            raise NotFoundError("Account", subject_id)
        return account

    async def create(self, account: Account) -> Account:
        """Create a new account.

        Args:
            account: Account to create

        Returns:
            Created account

        Raises:
            DuplicateAccountError: If the subject or email is already taken
        """
        with logfire.span(
            "account_service.create",
            subject_id=account.subject_id,
            role=account.role.value,
        ):
            created = await self.account_repository.create(account)
            logfire.info(
                "Account created",
                account_id=str(created.id),
                subject_id=created.subject_id,
                email=created.email,
                role=created.role.value,
            )
            return created

    async def record_login(self, subject_id: str, login: LoginUpdate) -> Account:
        """Apply a repeat login to an existing account.

        Args:
            subject_id: Provider subject identifier
            login: Profile and login metadata from the login

        Returns:
            Updated account

        Raises:
            NotFoundError: If no account has this subject
        """
        with logfire.span("account_service.record_login", subject_id=subject_id):
            account = await self.account_repository.update_by_subject_id(
                subject_id, login
            )
            if not account:
                logfire.warn("Account vanished before login update", subject_id=subject_id)
                raise NotFoundError("Account", subject_id)
            logfire.info(
                "Account login recorded",
                account_id=str(account.id),
                subject_id=subject_id,
                login_count=account.auth_metadata.login_count,
                profile_completion=account.profile_completion_percentage,
            )
            return account

    async def save(self, account: Account) -> Account:
        """Save changes to an existing account.

        Args:
            account: Account to save

        Returns:
            Saved account
        """
        with logfire.span(
            "account_service.save",
            account_id=str(account.id),
            subject_id=account.subject_id,
        ):
            saved = await self.account_repository.save(account)
            logfire.info(
                "Account saved",
                account_id=str(saved.id),
                profile_completion=saved.profile_completion_percentage,
            )
            return saved
