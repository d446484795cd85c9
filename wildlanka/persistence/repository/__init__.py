"""PostgreSQL repository implementations."""

from wildlanka.persistence.repository.account import PostgresAccountRepository
from wildlanka.persistence.repository.staff_record import PostgresStaffRecordStore

__all__ = [
    "PostgresAccountRepository",
    "PostgresStaffRecordStore",
]
