"""Identity provider integrations."""

from .jwt import JWTIdentityVerifier
from .mock import MockIdentityVerifier
from .userinfo import UserInfoIdentityVerifier

__all__ = ["JWTIdentityVerifier", "MockIdentityVerifier", "UserInfoIdentityVerifier"]
