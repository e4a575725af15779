"""In-memory user repository for testing."""

from typing import Optional

from hotdeals.domain.error import DuplicateIdentityError
from hotdeals.domain.model import User
from hotdeals.domain.repository import UserRepository
from hotdeals.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_uid(self, uid: str) -> Optional[User]:
        """Find a user by external identity."""
        return next((u for u in self._users.values() if u.uid == uid), None)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find the oldest user with this email."""
        matches = [u for u in self._users.values() if u.email == email]
        return min(matches, key=lambda u: (u.created_at, u.id), default=None)

    async def insert(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateIdentityError: If the uid is already bound
        """
        if await self.find_by_uid(user.uid):
            raise DuplicateIdentityError(user.uid)
        self._users[user.id] = user
        return user

    async def save(self, user: User) -> User:
        """Update an existing user."""
        self._users[user.id] = user
        return user
