"""Store registry domain service."""

import logfire

from hotdeals.domain.error import NotFoundError
from hotdeals.domain.model.store import Store
from hotdeals.domain.repository import StoreRepository
from hotdeals.domain.value import StoreId, utc_now
from hotdeals.util.ids import new_id
from hotdeals.util.locking import KeyedLocks

from .base import Service

STORE_REGISTRY_LOCK = ("registry", "stores")


class StoreService(Service):
    """Domain service for store operations."""

    def __init__(self, store_repository: StoreRepository, locks: KeyedLocks) -> None:
        """Initialize store service.

        Args:
            store_repository: Store repository
            locks: Shared lock registry
        """
        self.store_repository = store_repository
        self.locks = locks

    async def create_store(self, name: str, logo: str | None = None) -> Store:
        """Register a store.

        Names are not required to be unique; a duplicate is logged.

        Args:
            name: Display name
            logo: Logo URL

        Returns:
            Created store
        """
        with logfire.span("store_service.create_store", name=name):
            async with self.locks.hold(STORE_REGISTRY_LOCK):
                if await self.store_repository.find_by_name(name):
                    logfire.warn("Store name already in use", name=name)
                store = Store(
                    id=StoreId(new_id()),
                    name=name,
                    logo=logo,
                    created_at=utc_now(),
                )
                saved = await self.store_repository.save(store)
            logfire.info("Store created", store_id=str(saved.id), name=saved.name)
            return saved

    async def find_store(self, store_id: StoreId) -> Store | None:
        """Get a store by ID, or None."""
        return await self.store_repository.find_by_id(store_id)

    async def get_store(self, store_id: StoreId) -> Store:
        """Get a store by ID.

        Raises:
            NotFoundError: If store not found
        """
        with logfire.span("store_service.get_store", store_id=str(store_id)):
            store = await self.store_repository.find_by_id(store_id)
            if not store:
                logfire.warn("Store not found", store_id=str(store_id))
                raise NotFoundError("Store", str(store_id))
            return store

    async def find_by_name(self, name: str) -> Store | None:
        """Get the first store with this name, or None."""
        return await self.store_repository.find_by_name(name)

    async def list_stores(self, limit: int = 100, offset: int = 0) -> list[Store]:
        """List stores ordered by name."""
        with logfire.span("store_service.list_stores", limit=limit, offset=offset):
            return await self.store_repository.find_all(limit=limit, offset=offset)

    async def replace_store(self, store_id: StoreId, name: str, logo: str | None) -> Store:
        """Replace a store's record (last write wins).

        Raises:
            NotFoundError: If store not found
        """
        with logfire.span("store_service.replace_store", store_id=str(store_id)):
            async with self.locks.hold(STORE_REGISTRY_LOCK):
                existing = await self.get_store(store_id)
                replaced = Store(
                    id=existing.id,
                    name=name,
                    logo=logo,
                    created_at=existing.created_at,
                    updated_at=utc_now(),
                )
                saved = await self.store_repository.save(replaced)
            logfire.info("Store replaced", store_id=str(store_id), name=saved.name)
            return saved

    async def update_logo(self, store_id: StoreId, logo: str | None) -> Store:
        """Change a store's logo.

        Raises:
            NotFoundError: If store not found
        """
        existing = await self.get_store(store_id)
        return await self.replace_store(store_id, existing.name, logo)
