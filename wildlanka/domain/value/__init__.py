"""Domain value objects for WildLanka."""

from wildlanka.domain.value.identifiers import AccountId
from wildlanka.domain.value.types import (
    AccountStatus,
    ClientContext,
    IdentityAssertion,
    Role,
)

__all__ = [
    # Identifiers
    "AccountId",
    # Types
    "AccountStatus",
    "ClientContext",
    "IdentityAssertion",
    "Role",
]
