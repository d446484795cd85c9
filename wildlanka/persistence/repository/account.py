"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wildlanka.domain.error import DuplicateAccountError, PersistenceError
from wildlanka.domain.model import Account, LoginUpdate
from wildlanka.domain.repository import AccountRepository
from wildlanka.persistence.mappers import account_to_dict, row_to_account
from wildlanka.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_subject_id(self, subject_id: str) -> Optional[Account]:
        """Find an account by identity provider subject.

        Args:
            subject_id: Provider subject identifier

        Returns:
            Account if found, None otherwise

        Raises:
            PersistenceError: If the query fails
        """
        stmt = select(accounts_table).where(accounts_table.c.subject_id == subject_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load account: {e}") from e
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email_or_subject_id(
        self, email: Optional[str], subject_id: str
    ) -> Optional[Account]:
        """Find an account matching either the email or the subject.

        Args:
            email: Email address (may be None)
            subject_id: Provider subject identifier

        Returns:
            First matching account, None otherwise

        Raises:
            PersistenceError: If the query fails
        """
        conditions = [accounts_table.c.subject_id == subject_id]
        if email:
            conditions.append(accounts_table.c.email == email)

        stmt = select(accounts_table).where(or_(*conditions)).limit(1)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load account: {e}") from e
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def create(self, account: Account) -> Account:
        """Insert a new account.

        The insert runs in a SAVEPOINT so a duplicate-key failure leaves the
        surrounding transaction usable.

        Args:
            account: Account to insert

        Returns:
            The stored account

        Raises:
            DuplicateAccountError: If the subject or email is already taken
            PersistenceError: If the insert fails for another reason
        """
        stmt = accounts_table.insert().values(**account_to_dict(account))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateAccountError(
                f"Account already exists for subject {account.subject_id}"
            ) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to create account: {e}") from e
        return account

    async def update_by_subject_id(
        self, subject_id: str, login: LoginUpdate
    ) -> Optional[Account]:
        """Apply a repeat login in a single UPDATE.

        Only profile fields carried by the login are written; the login
        counter is incremented in SQL.

        Args:
            subject_id: Provider subject identifier
            login: Changes carried by the login

        Returns:
            Updated account, None if no account has this subject

        Raises:
            DuplicateAccountError: If the new email belongs to another account
            PersistenceError: If the update fails
        """
        profile = {
            field: value
            for field, value in login.profile_fields().items()
            if value is not None
        }
        stmt = (
            accounts_table.update()
            .where(accounts_table.c.subject_id == subject_id)
            .values(
                **profile,
                login_count=accounts_table.c.login_count + 1,
                last_login=login.last_login,
                last_ip=login.last_ip,
                user_agent=login.user_agent,
                updated_at=login.last_login,
            )
            .returning(*accounts_table.c)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            raise DuplicateAccountError(
                f"Email {login.email} belongs to another account"
            ) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update account: {e}") from e
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Overwrite an existing account.

        Args:
            account: Account to store

        Returns:
            The stored account

        Raises:
            PersistenceError: If the update fails
        """
        values = account_to_dict(account)
        # Identity columns never change
        values.pop("id")
        values.pop("subject_id")

        stmt = (
            accounts_table.update()
            .where(accounts_table.c.id == account.id)
            .values(**values)
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save account: {e}") from e
        return account
