"""In-memory store repository for testing."""

from typing import Optional

from hotdeals.domain.model import Store
from hotdeals.domain.repository import StoreRepository
from hotdeals.domain.value import StoreId


class InMemoryStoreRepository(StoreRepository):
    """In-memory implementation of StoreRepository for testing."""

    def __init__(self) -> None:
        self._stores: dict[StoreId, Store] = {}

    async def find_by_id(self, store_id: StoreId) -> Optional[Store]:
        """Find a store by ID."""
        return self._stores.get(store_id)

    async def find_by_name(self, name: str) -> Optional[Store]:
        """Find the oldest store with this name."""
        matches = [s for s in self._stores.values() if s.name == name]
        return min(matches, key=lambda s: (s.created_at, s.id), default=None)

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Store]:
        """List stores ordered by name."""
        stores = sorted(self._stores.values(), key=lambda s: (s.name, s.id))
        return stores[offset : offset + limit]

    async def save(self, store: Store) -> Store:
        """Save a store (create or replace)."""
        self._stores[store.id] = store
        return store
