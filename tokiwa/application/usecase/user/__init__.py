"""User profile use cases."""

from .get_user_data import GetUserDataUseCase
from .get_user_profile import GetUserProfileUseCase
from .update_user_profile import UpdateUserProfileUseCase

__all__ = [
    "GetUserDataUseCase",
    "GetUserProfileUseCase",
    "UpdateUserProfileUseCase",
]
