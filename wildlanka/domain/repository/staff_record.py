"""Staff record store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from wildlanka.domain.model.staff_record import StaffRecord


class StaffRecordStore(ABC):
    """Read access to one role-specific staff collection.

    Each collection names its email column its own way (``email`` or
    ``Email``), so the field is passed with every lookup.
    """

    collection: str

    @abstractmethod
    async def find_by_email(
        self, email_field: str, value: str
    ) -> Optional[StaffRecord]:
        """Find a staff record by email.

        Args:
            email_field: Name of the email field in this collection
            value: Email address to look for

        Returns:
            The record if found, None otherwise

        Raises:
            TransientLookupError: If the collection cannot be queried
        """
        pass
