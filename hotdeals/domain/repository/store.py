"""Store repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hotdeals.domain.model.store import Store
from hotdeals.domain.value import StoreId


class StoreRepository(ABC):
    """Repository for merchant records."""

    @abstractmethod
    async def find_by_id(self, store_id: StoreId) -> Optional[Store]:
        """Find a store by ID.

        Args:
            store_id: Store identifier

        Returns:
            Store if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Store]:
        """Find the first store with the given display name."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Store]:
        """Find stores ordered by name."""
        pass

    @abstractmethod
    async def save(self, store: Store) -> Store:
        """Save a store (create or replace the whole record)."""
        pass
