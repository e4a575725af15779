"""PostgreSQL implementation of User repository."""

from typing import Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotdeals.domain.error import DuplicateIdentityError
from hotdeals.domain.model import User
from hotdeals.domain.repository import UserRepository
from hotdeals.domain.value import UserId
from hotdeals.persistence.mappers import row_to_user, user_to_dict
from hotdeals.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with logfire.span("user_repository.find_by_id", user_id=str(user_id)):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_user(row._asdict()) if row else None

    async def find_by_uid(self, uid: str) -> Optional[User]:
        """Find a user by external identity."""
        with logfire.span("user_repository.find_by_uid", uid=uid):
            stmt = select(users_table).where(users_table.c.uid == uid)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_user(row._asdict()) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find the oldest user with this email."""
        with logfire.span("user_repository.find_by_email", email=email):
            stmt = (
                select(users_table)
                .where(users_table.c.email == email)
                .order_by(users_table.c.created_at, users_table.c.id)
                .limit(1)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_user(row._asdict()) if row else None

    async def insert(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateIdentityError: If the uid is already bound
        """
        with logfire.span("user_repository.insert", uid=user.uid):
            stmt = users_table.insert().values(**user_to_dict(user))
            try:
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
            except IntegrityError as e:
                logfire.warn("Identity conflict", uid=user.uid)
                raise DuplicateIdentityError(user.uid) from e
            await self.session.flush()
            logfire.info("User inserted", user_id=str(user.id))
            return user

    async def save(self, user: User) -> User:
        """Update an existing user."""
        with logfire.span("user_repository.save", user_id=str(user.id)):
            values = user_to_dict(user)
            values.pop("id")
            values.pop("created_at")
            stmt = update(users_table).where(users_table.c.id == user.id).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
            return user
