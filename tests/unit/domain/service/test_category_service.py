"""Unit tests for CategoryService."""

import asyncio

import pytest

from hotdeals.config import LedgerSettings
from hotdeals.domain.error import (
    DuplicatePathError,
    InvalidNamesError,
    InvalidPathError,
    MissingParentError,
    NotFoundError,
)
from hotdeals.domain.service import CategoryService
from hotdeals.domain.value import CategoryIcon, CategoryPath
from hotdeals.persistence.repository.inmemory import InMemoryCategoryRepository
from hotdeals.util.locking import KeyedLocks
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def make_service(auto_create_tags: bool = False) -> CategoryService:
    return CategoryService(
        category_repository=InMemoryCategoryRepository(),
        locks=KeyedLocks(default_timeout=1.0),
        ledger_settings=LedgerSettings(auto_create_tags=auto_create_tags),
    )


class TestCreateCategory:
    """Tests for create_category."""

    @pytest.mark.asyncio
    async def test_create_top_level_category(self, unit_env):
        service = await unit_env.get(CategoryService)
        icon = CategoryIcon(ligature="computer", font_family="MaterialIcons")

        category = await service.create_category(
            "/computers", "/", {"en": "Computers", "tr": "Bilgisayar"}, icon=icon
        )

        assert category.path == CategoryPath("/computers")
        assert category.parent.is_root
        assert category.icon == icon
        assert not category.is_tag
        assert await service.find_by_path("/computers") == category

    @pytest.mark.asyncio
    async def test_create_child_under_existing_parent(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/computers", "/", {"en": "Computers"})

        child = await service.create_category(
            "/computers/video-cards", "/computers", {"en": "Video Cards"}
        )

        assert child.parent == CategoryPath("/computers")

    @pytest.mark.asyncio
    async def test_duplicate_path_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/computers", "/", {"en": "Computers"})

        with pytest.raises(DuplicatePathError):
            await service.create_category("/computers", "/", {"en": "Other"})

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(MissingParentError) as exc_info:
            await service.create_category(
                "/computers/video-cards", "/computers", {"en": "Video Cards"}
            )

        assert exc_info.value.parent == "/computers"

    @pytest.mark.asyncio
    async def test_parent_must_match_path(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/computers", "/", {"en": "Computers"})

        with pytest.raises(InvalidPathError):
            await service.create_category("/laptops", "/computers", {"en": "Laptops"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "computers", "/Computers", ""])
    async def test_invalid_paths_rejected(self, unit_env, path):
        service = await unit_env.get(CategoryService)

        with pytest.raises(InvalidPathError):
            await service.create_category(path, "/", {"en": "X"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("names", [{}, {"en": "   "}, {"": "Name"}])
    async def test_invalid_names_rejected(self, unit_env, names):
        service = await unit_env.get(CategoryService)

        with pytest.raises(InvalidNamesError):
            await service.create_category("/computers", "/", names)

    @pytest.mark.asyncio
    async def test_concurrent_creates_yield_one_category(self):
        service = make_service()

        results = await asyncio.gather(
            *(service.create_category("/phones", "/", {"en": "Phones"}) for _ in range(5)),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 4
        assert all(isinstance(e, DuplicatePathError) for e in errors)


class TestTreeQueries:
    """Tests for lookups and traversal."""

    @pytest.mark.asyncio
    async def test_root_lookup_returns_none(self, unit_env):
        service = await unit_env.get(CategoryService)
        assert await service.find_by_path("/") is None

    @pytest.mark.asyncio
    async def test_resolve_missing_path_raises(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(NotFoundError):
            await service.resolve_path("/nowhere")

    @pytest.mark.asyncio
    async def test_children_sorted_and_direct_only(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/electronics", "/", {"en": "Electronics"})
        await service.create_category("/computers", "/", {"en": "Computers"})
        await service.create_category(
            "/computers/video-cards", "/computers", {"en": "Video Cards"}
        )

        roots = await service.children("/")
        nested = await service.children("/computers")

        assert [c.path.root for c in roots] == ["/computers", "/electronics"]
        assert [c.path.root for c in nested] == ["/computers/video-cards"]

    @pytest.mark.asyncio
    async def test_children_of_leaf_is_empty(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/computers", "/", {"en": "Computers"})

        assert await service.children("/computers") == []

    @pytest.mark.asyncio
    async def test_children_of_missing_path_raises(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(NotFoundError):
            await service.children("/nowhere")

    def test_is_descendant(self):
        service = make_service()

        assert service.is_descendant("/computers/video-cards", "/computers")
        assert service.is_descendant("/computers", "/")
        assert not service.is_descendant("/computers", "/computers")
        assert not service.is_descendant("/computers-extra", "/computers")

    @pytest.mark.asyncio
    async def test_list_tags_only_returns_tags(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create_category("/computers", "/", {"en": "Computers"})
        await service.create_category("/sale", "/", {"en": "Sale"}, is_tag=True)
        await service.create_category("/free", "/", {"en": "Free"}, is_tag=True)

        tags = await service.list_tags()

        assert [t.path.root for t in tags] == ["/free", "/sale"]


class TestEnsureTag:
    """Tests for tag auto-creation."""

    @pytest.mark.asyncio
    async def test_missing_tag_not_created_when_disabled(self):
        service = make_service(auto_create_tags=False)

        assert await service.ensure_tag("/black-friday") is None
        assert await service.find_by_path("/black-friday") is None

    @pytest.mark.asyncio
    async def test_missing_tag_created_when_enabled(self):
        service = make_service(auto_create_tags=True)

        tag = await service.ensure_tag("/black-friday")

        assert tag is not None
        assert tag.is_tag
        assert tag.names == {"en": "black friday"}

    @pytest.mark.asyncio
    async def test_nested_tag_path_not_auto_created(self):
        service = make_service(auto_create_tags=True)

        assert await service.ensure_tag("/sale/shoes") is None

    @pytest.mark.asyncio
    async def test_non_tag_category_is_not_a_tag(self):
        service = make_service(auto_create_tags=True)
        await service.create_category("/computers", "/", {"en": "Computers"})

        assert await service.ensure_tag("/computers") is None
