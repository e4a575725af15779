"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from hotdeals.application.usecase.user import (
    CreateUserRequest,
    CreateUserUseCase,
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
    UserItem,
)
from hotdeals.interface.api.caller import require_user_id
from hotdeals.interface.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    nickname: str | None = Field(default=None, min_length=1, max_length=50)
    avatar: str | None = None


@router.post("", response_model=UserItem, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    create_user_use_case: FromDishka[CreateUserUseCase],
) -> UserItem:
    """Create the user record for an external identity.

    Raises:
        HTTPException: 409 if the identity is already bound
    """
    try:
        return await create_user_use_case.execute(request)
    except Exception as e:
        raise http_error(e, "create user") from e


@router.patch("/me", response_model=UserItem)
async def update_my_profile(
    request: UpdateProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    x_user_id: str | None = Header(default=None),
) -> UserItem:
    """Update the caller's nickname and/or avatar."""
    try:
        return await update_user_profile_use_case.execute(
            UpdateUserProfileRequest(
                user_id=require_user_id(x_user_id),
                nickname=request.nickname,
                avatar=request.avatar,
            )
        )
    except Exception as e:
        raise http_error(e, "update profile") from e


@router.get("/by-uid/{uid}", response_model=GetUserResponse)
async def get_user_by_uid(
    uid: str,
    get_user_use_case: FromDishka[GetUserUseCase],
) -> GetUserResponse:
    """Get the user bound to an external identity."""
    try:
        return await get_user_use_case.execute(GetUserRequest(uid=uid))
    except Exception as e:
        raise http_error(e, "get user") from e


@router.get("/{user_id}", response_model=GetUserResponse)
async def get_user(
    user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
) -> GetUserResponse:
    """Get a user profile with their deal count."""
    try:
        return await get_user_use_case.execute(GetUserRequest(user_id=user_id))
    except Exception as e:
        raise http_error(e, "get user") from e
