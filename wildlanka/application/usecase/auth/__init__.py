"""Authentication use cases."""

from .get_profile import GetProfileUseCase
from .login import LoginUseCase
from .update_profile import UpdateProfileUseCase

__all__ = ["GetProfileUseCase", "LoginUseCase", "UpdateProfileUseCase"]
