"""In-memory staff record store for testing."""

from typing import Any, Optional

from wildlanka.domain.error import TransientLookupError
from wildlanka.domain.model import StaffRecord
from wildlanka.domain.repository import StaffRecordStore


class InMemoryStaffRecordStore(StaffRecordStore):
    """In-memory staff collection.

    Records are stored as plain dicts, keyed the way the collection names
    its email field.
    """

    def __init__(self, collection: str) -> None:
        self.collection = collection
        self._records: list[dict[str, Any]] = []
        self.failure: Exception | None = None
        self.lookups = 0

    def add(self, record: dict[str, Any]) -> None:
        """Provision a staff record."""
        self._records.append(dict(record))

    def fail_with(self, error: Exception | None) -> None:
        """Make every lookup raise ``error`` (None restores normal lookups)."""
        self.failure = error

    async def find_by_email(
        self, email_field: str, value: str
    ) -> Optional[StaffRecord]:
        """Find a staff record by exact email."""
        self.lookups += 1
        if self.failure is not None:
            raise TransientLookupError(self.collection, str(self.failure))

        for record in self._records:
            if record.get(email_field) == value:
                data = {k: v for k, v in record.items() if k != email_field}
                return StaffRecord(collection=self.collection, email=value, data=data)
        return None
