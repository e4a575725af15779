"""User registry domain service."""

import logfire

from hotdeals.domain.error import DuplicateIdentityError, NotFoundError
from hotdeals.domain.model import User
from hotdeals.domain.repository import UserRepository
from hotdeals.domain.value import UserId, utc_now
from hotdeals.util.ids import new_id
from hotdeals.util.locking import KeyedLocks

from .base import Service

USER_REGISTRY_LOCK = ("registry", "users")


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository, locks: KeyedLocks) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            locks: Shared lock registry
        """
        self.user_repository = user_repository
        self.locks = locks

    async def create_user(
        self,
        uid: str,
        nickname: str,
        email: str | None = None,
        avatar: str | None = None,
    ) -> User:
        """Create the user record for an external identity.

        Args:
            uid: External authentication identity
            nickname: Display nickname
            email: Email address
            avatar: Avatar URL

        Returns:
            Created user

        Raises:
            DuplicateIdentityError: If ``uid`` is already bound to a user
        """
        with logfire.span("user_service.create_user", uid=uid):
            async with self.locks.hold(USER_REGISTRY_LOCK):
                if await self.user_repository.find_by_uid(uid):
                    logfire.warn("Identity already bound", uid=uid)
                    raise DuplicateIdentityError(uid)
                user = User(
                    id=UserId(new_id()),
                    uid=uid,
                    email=email,
                    nickname=nickname,
                    avatar=avatar,
                    created_at=utc_now(),
                )
                saved = await self.user_repository.insert(user)
            logfire.info("User created", user_id=str(saved.id), uid=uid)
            return saved

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID, or None."""
        return await self.user_repository.find_by_id(user_id)

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_uid(self, uid: str) -> User | None:
        """Get the user bound to an external identity, or None."""
        with logfire.span("user_service.find_by_uid", uid=uid):
            user = await self.user_repository.find_by_uid(uid)
            if not user:
                logfire.info("No user for identity", uid=uid)
            return user

    async def find_by_email(self, email: str) -> User | None:
        """Best-effort lookup by email (first match)."""
        with logfire.span("user_service.find_by_email", email=email):
            return await self.user_repository.find_by_email(email)

    async def update_profile(
        self,
        user_id: UserId,
        nickname: str | None = None,
        avatar: str | None = None,
    ) -> User:
        """Update nickname and/or avatar.

        Fields left as None are unchanged.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            async with self.locks.hold(USER_REGISTRY_LOCK):
                user = await self.get_by_id(user_id)
                changes: dict = {}
                if nickname is not None:
                    changes["nickname"] = nickname
                if avatar is not None:
                    changes["avatar"] = avatar
                if not changes:
                    return user
                updated = User.model_validate(
                    {**user.model_dump(), **changes, "updated_at": utc_now()}
                )
                saved = await self.user_repository.save(updated)
            logfire.info(
                "User profile updated", user_id=str(user_id), fields=sorted(changes)
            )
            return saved
