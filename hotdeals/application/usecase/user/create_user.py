"""Create user use case."""

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import UserService

from .common import UserItem


class CreateUserRequest(BaseModel):
    """Create user request."""

    uid: str = Field(min_length=1, max_length=128)  # external identity
    nickname: str = Field(min_length=1, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    avatar: str | None = None


class CreateUserUseCase:
    """Use case for registering the user record of an external identity."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize create user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: CreateUserRequest) -> UserItem:
        """Execute create user flow.

        Raises:
            DuplicateIdentityError: If the uid is already bound
        """
        with logfire.span("create_user.execute", uid=request.uid):
            user = await self.user_service.create_user(
                uid=request.uid,
                nickname=request.nickname,
                email=request.email,
                avatar=request.avatar,
            )
            return UserItem.from_user(user)
