"""Domain model entities for WildLanka."""

from wildlanka.domain.model.account import (
    Account,
    Address,
    AuthMetadata,
    LoginUpdate,
    NotificationPreferences,
    Preferences,
    ProfileUpdate,
)
from wildlanka.domain.model.staff_record import StaffRecord

__all__ = [
    "Account",
    "Address",
    "AuthMetadata",
    "LoginUpdate",
    "NotificationPreferences",
    "Preferences",
    "ProfileUpdate",
    "StaffRecord",
]
