"""Get user use case."""

from uuid import UUID

from pydantic import BaseModel, model_validator

from hotdeals.domain.error import NotFoundError
from hotdeals.domain.service import DealService, UserService
from hotdeals.domain.value import UserId

from .common import UserItem


class GetUserRequest(BaseModel):
    """Get user request (by id or by external identity)."""

    user_id: str | None = None
    uid: str | None = None

    @model_validator(mode="after")
    def validate_one_key(self) -> "GetUserRequest":
        if (self.user_id is None) == (self.uid is None):
            raise ValueError("Exactly one of user_id or uid is required")
        return self


class GetUserResponse(UserItem):
    """Get user response."""

    deal_count: int


class GetUserUseCase:
    """Use case for reading a user profile with their deal count."""

    def __init__(self, user_service: UserService, deal_service: DealService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
            deal_service: Deal domain service
        """
        self.user_service = user_service
        self.deal_service = deal_service

    async def execute(self, request: GetUserRequest) -> GetUserResponse:
        """Execute get user flow.

        Raises:
            NotFoundError: If user not found
        """
        if request.user_id is not None:
            user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        else:
            user = await self.user_service.find_by_uid(request.uid)
            if not user:
                raise NotFoundError("User", request.uid)

        deal_count = await self.deal_service.count_by_poster(user.id)
        return GetUserResponse(
            **UserItem.from_user(user).model_dump(), deal_count=deal_count
        )
