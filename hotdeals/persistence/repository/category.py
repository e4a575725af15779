"""PostgreSQL implementation of Category repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotdeals.domain.error import DuplicatePathError
from hotdeals.domain.model import Category
from hotdeals.domain.repository import CategoryRepository
from hotdeals.domain.value import CategoryPath
from hotdeals.persistence.mappers import category_to_dict, row_to_category
from hotdeals.persistence.tables import categories_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_path(self, path: CategoryPath) -> Optional[Category]:
        """Find a category by path."""
        with logfire.span("category_repository.find_by_path", path=path.root):
            stmt = select(categories_table).where(categories_table.c.path == path.root)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_category(row._asdict()) if row else None

    async def find_by_paths(self, paths: list[CategoryPath]) -> list[Category]:
        """Find the categories among ``paths`` that exist."""
        if not paths:
            return []
        with logfire.span("category_repository.find_by_paths", count=len(paths)):
            stmt = select(categories_table).where(
                categories_table.c.path.in_([p.root for p in paths])
            )
            result = await self.session.execute(stmt)
            return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent: CategoryPath) -> list[Category]:
        """Find direct children of a path, ordered by path."""
        with logfire.span("category_repository.find_children", parent=parent.root):
            stmt = (
                select(categories_table)
                .where(categories_table.c.parent == parent.root)
                .order_by(categories_table.c.path)
            )
            result = await self.session.execute(stmt)
            return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_tags(self) -> list[Category]:
        """Find every tag category, ordered by path."""
        with logfire.span("category_repository.find_tags"):
            stmt = (
                select(categories_table)
                .where(categories_table.c.is_tag.is_(True))
                .order_by(categories_table.c.path)
            )
            result = await self.session.execute(stmt)
            return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def insert(self, category: Category) -> Category:
        """Insert a new category.

        Raises:
            DuplicatePathError: If the path is already taken
        """
        with logfire.span("category_repository.insert", path=category.path.root):
            stmt = categories_table.insert().values(**category_to_dict(category))
            try:
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
            except IntegrityError as e:
                logfire.warn("Category path conflict", path=category.path.root)
                raise DuplicatePathError(category.path.root) from e
            await self.session.flush()
            return category
