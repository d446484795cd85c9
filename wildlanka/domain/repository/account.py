"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from wildlanka.domain.model.account import Account, LoginUpdate


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Implementations must enforce uniqueness of ``subject_id`` and ``email``
    and raise ``DuplicateAccountError`` when ``create`` would violate it.
    Storage failures surface as ``PersistenceError``.
    """

    @abstractmethod
    async def find_by_subject_id(self, subject_id: str) -> Optional[Account]:
        """Find an account by identity provider subject (exact match).

        Args:
            subject_id: Provider subject identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email_or_subject_id(
        self, email: Optional[str], subject_id: str
    ) -> Optional[Account]:
        """Find an account matching either the email or the subject.

        Args:
            email: Email address (may be None)
            subject_id: Provider subject identifier

        Returns:
            The first matching account, None if neither matches
        """
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: The account to insert

        Returns:
            The stored account

        Raises:
            DuplicateAccountError: If the subject or email is already taken
        """
        pass

    @abstractmethod
    async def update_by_subject_id(
        self, subject_id: str, login: LoginUpdate
    ) -> Optional[Account]:
        """Apply a repeat login to the account with this subject.

        Non-null profile fields overwrite stored ones, the login counter is
        incremented atomically and the login metadata replaced.

        Args:
            subject_id: Provider subject identifier
            login: Changes carried by the login

        Returns:
            The updated account, None if no account has this subject
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Overwrite an existing account.

        Args:
            account: The account to store

        Returns:
            The stored account
        """
        pass
