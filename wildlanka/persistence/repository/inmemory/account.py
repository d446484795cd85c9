"""In-memory account repository for testing."""

from typing import Optional

from wildlanka.domain.error import DuplicateAccountError
from wildlanka.domain.model import Account, LoginUpdate
from wildlanka.domain.repository import AccountRepository
from wildlanka.domain.value import AccountId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_subject_id(self, subject_id: str) -> Optional[Account]:
        """Find an account by subject."""
        for account in self._accounts.values():
            if account.subject_id == subject_id:
                return account
        return None

    async def find_by_email_or_subject_id(
        self, email: Optional[str], subject_id: str
    ) -> Optional[Account]:
        """Find an account by email or subject."""
        for account in self._accounts.values():
            if account.subject_id == subject_id or (email and account.email == email):
                return account
        return None

    async def create(self, account: Account) -> Account:
        """Insert an account, enforcing unique subject and email."""
        for existing in self._accounts.values():
            if existing.subject_id == account.subject_id:
                raise DuplicateAccountError(
                    f"Account already exists for subject {account.subject_id}"
                )
            if existing.email == account.email:
                raise DuplicateAccountError(
                    f"Account already exists for email {account.email}"
                )
        self._accounts[account.id] = account
        return account

    async def update_by_subject_id(
        self, subject_id: str, login: LoginUpdate
    ) -> Optional[Account]:
        """Apply a repeat login to the account with this subject."""
        account = await self.find_by_subject_id(subject_id)
        if account is None:
            return None

        if login.email and login.email != account.email:
            for other in self._accounts.values():
                if other.id != account.id and other.email == login.email:
                    raise DuplicateAccountError(
                        f"Email {login.email} belongs to another account"
                    )

        updated = account.apply_login(login)
        self._accounts[account.id] = updated
        return updated

    async def save(self, account: Account) -> Account:
        """Overwrite an account."""
        self._accounts[account.id] = account
        return account
