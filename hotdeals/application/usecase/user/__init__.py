"""User use cases."""

from .common import UserItem
from .create_user import CreateUserRequest, CreateUserUseCase
from .get_user import GetUserRequest, GetUserResponse, GetUserUseCase
from .update_user_profile import UpdateUserProfileRequest, UpdateUserProfileUseCase

__all__ = [
    "CreateUserRequest",
    "CreateUserUseCase",
    "GetUserRequest",
    "GetUserResponse",
    "GetUserUseCase",
    "UpdateUserProfileRequest",
    "UpdateUserProfileUseCase",
    "UserItem",
]
