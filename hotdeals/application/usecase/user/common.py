"""Shared user response models."""

from datetime import datetime

from pydantic import BaseModel

from hotdeals.domain.model import User


class UserItem(BaseModel):
    """User in responses."""

    user_id: str
    uid: str
    email: str | None
    nickname: str
    avatar: str | None
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> "UserItem":
        return cls(
            user_id=str(user.id),
            uid=user.uid,
            email=user.email,
            nickname=user.nickname,
            avatar=user.avatar,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
