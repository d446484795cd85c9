"""Staff records provisioned per role.

Administrators create these directly in a role-specific collection before
the staff member ever signs in. Their existence decides the role of the
account created at first login.
"""

from typing import Any

from wildlanka.domain.model.common import DomainModel


class StaffRecord(DomainModel):
    """A record found in one of the role-specific staff collections."""

    collection: str
    email: str
    data: dict[str, Any] = {}
