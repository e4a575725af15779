"""In-memory category repository for testing."""

from typing import Optional

from hotdeals.domain.error import DuplicatePathError
from hotdeals.domain.model import Category
from hotdeals.domain.repository import CategoryRepository
from hotdeals.domain.value import CategoryPath


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}

    async def find_by_path(self, path: CategoryPath) -> Optional[Category]:
        """Find a category by path."""
        return self._categories.get(path.root)

    async def find_by_paths(self, paths: list[CategoryPath]) -> list[Category]:
        """Find the categories among ``paths`` that exist."""
        return [self._categories[p.root] for p in paths if p.root in self._categories]

    async def find_children(self, parent: CategoryPath) -> list[Category]:
        """Find direct children of a path, ordered by path."""
        children = [c for c in self._categories.values() if c.parent == parent]
        return sorted(children, key=lambda c: c.path)

    async def find_tags(self) -> list[Category]:
        """Find every tag category, ordered by path."""
        return sorted(
            (c for c in self._categories.values() if c.is_tag), key=lambda c: c.path
        )

    async def insert(self, category: Category) -> Category:
        """Insert a new category.

        Raises:
            DuplicatePathError: If the path is already taken
        """
        if category.path.root in self._categories:
            raise DuplicatePathError(category.path.root)
        self._categories[category.path.root] = category
        return category
