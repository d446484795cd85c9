"""PostgreSQL implementation of the staff record stores."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wildlanka.domain.error import TransientLookupError
from wildlanka.domain.model import StaffRecord
from wildlanka.domain.repository import StaffRecordStore
from wildlanka.persistence.mappers import row_to_staff_record
from wildlanka.persistence.tables import staff_tables


class PostgresStaffRecordStore(StaffRecordStore):
    """Reads one staff table."""

    def __init__(self, session: AsyncSession, collection: str) -> None:
        """Initialize store for one collection.

        Args:
            session: SQLAlchemy async session
            collection: Staff table name

        Raises:
            KeyError: If no such staff table exists
        """
        self.session = session
        self.collection = collection
        self.table = staff_tables[collection]

    async def find_by_email(
        self, email_field: str, value: str
    ) -> Optional[StaffRecord]:
        """Find a staff record by exact email.

        Args:
            email_field: Name of the email column
            value: Email address to look for

        Returns:
            The record if found, None otherwise

        Raises:
            TransientLookupError: If the table cannot be queried
        """
        column = self.table.c.get(email_field)
        if column is None:
            raise TransientLookupError(
                self.collection, f"unknown email field {email_field}"
            )

        stmt = select(self.table).where(column == value).limit(1)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except SQLAlchemyError as e:
            raise TransientLookupError(self.collection, str(e)) from e

        if row is None:
            return None
        return row_to_staff_record(self.collection, email_field, dict(row))
