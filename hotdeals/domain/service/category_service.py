"""Category tree domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from hotdeals.config import LedgerSettings
from hotdeals.domain.error import (
    DuplicatePathError,
    InvalidNamesError,
    InvalidPathError,
    MissingParentError,
    NotFoundError,
)
from hotdeals.domain.model.category import Category
from hotdeals.domain.repository import CategoryRepository
from hotdeals.domain.value import CategoryIcon, CategoryId, CategoryPath, utc_now
from hotdeals.util.ids import new_id
from hotdeals.util.locking import KeyedLocks

from .base import Service

CATEGORY_REGISTRY_LOCK = ("registry", "categories")


def parse_path(value: str | CategoryPath) -> CategoryPath:
    """Coerce a raw path into a CategoryPath.

    Raises:
        InvalidPathError: If the path is malformed
    """
    if isinstance(value, CategoryPath):
        return value
    try:
        return CategoryPath(value)
    except PydanticValidationError as e:
        raise InvalidPathError(f"Invalid category path {value!r}") from e


class CategoryService(Service):
    """Domain service for the category forest."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        locks: KeyedLocks,
        ledger_settings: LedgerSettings,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            locks: Shared lock registry (registry writes take a coarse lock)
            ledger_settings: Ledger configuration
        """
        self.category_repository = category_repository
        self.locks = locks
        self.ledger_settings = ledger_settings

    async def create_category(
        self,
        path: str | CategoryPath,
        parent: str | CategoryPath,
        names: dict[str, str],
        icon: CategoryIcon | None = None,
        is_tag: bool = False,
    ) -> Category:
        """Create a category or tag.

        Args:
            path: Canonical path of the new category
            parent: Parent path (``/`` for top level)
            names: Locale code to display name (at least one entry)
            icon: Optional icon reference
            is_tag: Whether the category is a tag

        Returns:
            Created category

        Raises:
            InvalidPathError: If a path is malformed, is the root, or
                ``parent`` is not the structural parent of ``path``
            InvalidNamesError: If no usable name is given
            DuplicatePathError: If ``path`` already exists
            MissingParentError: If ``parent`` is not the root and does not exist
        """
        path = parse_path(path)
        parent = parse_path(parent)

        with logfire.span(
            "category_service.create_category",
            path=path.root,
            parent=parent.root,
            is_tag=is_tag,
        ):
            if path.is_root:
                raise InvalidPathError("The root path '/' is implicit")
            if path.parent != parent:
                raise InvalidPathError(
                    f"Parent of {path.root} must be {path.parent.root}, got {parent.root}"
                )
            self._validate_names(names)

            async with self.locks.hold(CATEGORY_REGISTRY_LOCK):
                if await self.category_repository.find_by_path(path):
                    logfire.warn("Duplicate category path", path=path.root)
                    raise DuplicatePathError(path.root)

                if not parent.is_root:
                    if not await self.category_repository.find_by_path(parent):
                        logfire.warn(
                            "Category parent missing",
                            path=path.root,
                            parent=parent.root,
                        )
                        raise MissingParentError(parent.root)

                category = Category(
                    id=CategoryId(new_id()),
                    path=path,
                    parent=parent,
                    names=dict(names),
                    icon=icon,
                    is_tag=is_tag,
                    created_at=utc_now(),
                )
                saved = await self.category_repository.insert(category)

            logfire.info(
                "Category created",
                category_id=str(saved.id),
                path=saved.path.root,
                is_tag=saved.is_tag,
            )
            return saved

    async def find_by_path(self, path: str | CategoryPath) -> Category | None:
        """Get a category by path, or None."""
        path = parse_path(path)
        if path.is_root:
            return None
        return await self.category_repository.find_by_path(path)

    async def resolve_path(self, path: str | CategoryPath) -> Category:
        """Get a category by path.

        Raises:
            NotFoundError: If no category has this path
        """
        path = parse_path(path)
        with logfire.span("category_service.resolve_path", path=path.root):
            category = await self.find_by_path(path)
            if not category:
                logfire.warn("Category not found", path=path.root)
                raise NotFoundError("Category", path.root)
            return category

    async def children(self, path: str | CategoryPath) -> list[Category]:
        """Direct children of a path, sorted by path.

        Raises:
            NotFoundError: If ``path`` is neither the root nor an existing category
        """
        path = parse_path(path)
        with logfire.span("category_service.children", path=path.root):
            if not path.is_root:
                await self.resolve_path(path)
            children = await self.category_repository.find_children(path)
            children.sort(key=lambda c: c.path)
            logfire.info("Category children listed", path=path.root, count=len(children))
            return children

    def is_descendant(
        self, path: str | CategoryPath, ancestor: str | CategoryPath
    ) -> bool:
        """Whether ``path`` lies strictly below ``ancestor``.

        Purely structural: paths are canonical, so no lookup is needed.
        """
        return parse_path(path).is_descendant_of(parse_path(ancestor))

    async def list_tags(self) -> list[Category]:
        """All tag categories, sorted by path."""
        with logfire.span("category_service.list_tags"):
            tags = await self.category_repository.find_tags()
            tags.sort(key=lambda c: c.path)
            return tags

    async def ensure_tag(self, path: str | CategoryPath) -> Category | None:
        """Return the tag at ``path``, creating it when auto-creation is on.

        Auto-created tags are top-level with an ``en`` name derived from
        the path. Returns None when the tag is missing and auto-creation is
        off, or when ``path`` names a non-tag category.
        """
        path = parse_path(path)
        existing = await self.find_by_path(path)
        if existing:
            return existing if existing.is_tag else None
        if not self.ledger_settings.auto_create_tags or not path.parent.is_root:
            return None

        name = path.segments[-1].replace("-", " ").replace("_", " ")
        try:
            created = await self.create_category(
                path=path, parent=path.parent, names={"en": name}, is_tag=True
            )
        except DuplicatePathError:
            # Created concurrently
            created = await self.resolve_path(path)
            return created if created.is_tag else None
        logfire.info("Tag auto-created", path=path.root)
        return created

    @staticmethod
    def _validate_names(names: dict[str, str]) -> None:
        if not names:
            raise InvalidNamesError("At least one localized name is required")
        for locale, name in names.items():
            if not locale or not locale.strip():
                raise InvalidNamesError("Locale codes must not be blank")
            if not name or not name.strip():
                raise InvalidNamesError(f"Name for locale {locale!r} must not be blank")
