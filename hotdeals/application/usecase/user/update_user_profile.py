"""Update user profile use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from hotdeals.domain.service import UserService
from hotdeals.domain.value import UserId

from .common import UserItem


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    user_id: str  # From the caller header
    nickname: str | None = Field(default=None, min_length=1, max_length=50)
    avatar: str | None = None


class UpdateUserProfileUseCase:
    """Use case for updating a user's profile.

    Users can change their nickname and avatar. The external identity and
    email cannot be changed through this endpoint.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> UserItem:
        """Execute update user profile flow.

        Args:
            request: Request with user ID and fields to update

        Returns:
            Updated user profile information

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.update_profile(
            UserId(UUID(request.user_id)),
            nickname=request.nickname,
            avatar=request.avatar,
        )
        return UserItem.from_user(user)
