"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hotdeals.domain.model.category import Category
from hotdeals.domain.value import CategoryPath


class CategoryRepository(ABC):
    """Repository for the category forest, keyed by canonical path."""

    @abstractmethod
    async def find_by_path(self, path: CategoryPath) -> Optional[Category]:
        """Find a category by path.

        Args:
            path: Canonical category path

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_paths(self, paths: list[CategoryPath]) -> list[Category]:
        """Find several categories in one query.

        Args:
            paths: Canonical paths

        Returns:
            Found categories (may be fewer than requested)
        """
        pass

    @abstractmethod
    async def find_children(self, parent: CategoryPath) -> list[Category]:
        """Find the direct children of a path, sorted by path.

        Args:
            parent: Parent path (``/`` for top-level categories)

        Returns:
            Child categories
        """
        pass

    @abstractmethod
    async def find_tags(self) -> list[Category]:
        """Find all tag categories, sorted by path."""
        pass

    @abstractmethod
    async def insert(self, category: Category) -> Category:
        """Insert a new category.

        Args:
            category: Category to insert

        Returns:
            The inserted category

        Raises:
            DuplicatePathError: If the path is already taken
        """
        pass
