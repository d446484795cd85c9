"""Domain services."""

from .account_service import AccountService
from .auth_service import AuthService, IdentityVerifier
from .base import Service
from .role_resolver import (
    EMAIL_DOMAIN_RULES,
    EMAIL_KEYWORD_RULES,
    STAFF_COLLECTIONS,
    RoleResolver,
    SpecializedRoleSource,
    StaffCollection,
)

__all__ = [
    "AccountService",
    "AuthService",
    "EMAIL_DOMAIN_RULES",
    "EMAIL_KEYWORD_RULES",
    "IdentityVerifier",
    "RoleResolver",
    "STAFF_COLLECTIONS",
    "Service",
    "SpecializedRoleSource",
    "StaffCollection",
]
