"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hotdeals.domain.model.user import User
from hotdeals.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_uid(self, uid: str) -> Optional[User]:
        """Find the user bound to an external identity.

        Args:
            uid: External authentication identity

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (first match, emails are not unique).

        Args:
            email: Email address

        Returns:
            A matching user if any, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateIdentityError: If ``user.uid`` is already bound
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save an existing user (replace the whole record)."""
        pass
