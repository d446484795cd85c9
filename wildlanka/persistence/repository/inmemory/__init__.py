"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .staff_record import InMemoryStaffRecordStore

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryStaffRecordStore",
]
