"""Repository interfaces for the WildLanka domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from wildlanka.domain.repository.account import AccountRepository
from wildlanka.domain.repository.staff_record import StaffRecordStore

__all__ = [
    "AccountRepository",
    "StaffRecordStore",
]
