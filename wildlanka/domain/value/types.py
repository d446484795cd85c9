"""Domain value objects for WildLanka.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from wildlanka.domain.value.common import ValueObject


class Role(str, Enum):
    """Platform role of an account.

    Values match what the platform has always stored, including the
    capitalised officer roles.
    """

    ADMIN = "admin"
    CALL_OPERATOR = "callOperator"
    EMERGENCY_OFFICER = "EmergencyOfficer"
    SAFARI_DRIVER = "safariDriver"
    TOUR_GUIDE = "tourGuide"
    TOURIST = "tourist"
    VET = "vet"
    WILDLIFE_OFFICER = "WildlifeOfficer"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """Parse a stored role value.

        Only exact values are members; "VET" or "emergencyofficer" are not.

        Returns:
            Matching role, or None if the value is not a known role
        """
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class AccountStatus(str, Enum):
    """Lifecycle status of an account."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"


class IdentityAssertion(ValueObject):
    """Verified identity claims for one login request.

    Produced by the identity provider integration, never persisted.
    """

    subject_id: str = ""  # Stable provider subject ("auth0|123")
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    nickname: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    locale: str | None = None
    email_verified: bool | None = None
    role_hint: str | None = None  # app_metadata.role as sent by the provider

    @field_validator("subject_id", mode="before")
    @classmethod
    def normalize_subject_id(cls, v: str | None) -> str:
        """Treat a missing subject as empty."""
        return (v or "").strip()

    @property
    def has_subject(self) -> bool:
        """Whether the assertion identifies anyone at all."""
        return bool(self.subject_id)


class ClientContext(ValueObject):
    """Where a login request came from."""

    ip: str | None = None
    user_agent: str = "Unknown"
