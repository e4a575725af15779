"""Deal repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from hotdeals.domain.model.deal import Deal
from hotdeals.domain.value import (
    CategoryPath,
    DealCursor,
    DealId,
    DealSortField,
    DealStatus,
    SortOrder,
    StoreId,
    UserId,
)


class DealRepository(ABC):
    """Repository for Deal aggregate.

    Defines the contract for deal persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, deal_id: DealId, for_update: bool = False
    ) -> Optional[Deal]:
        """Find a deal by ID.

        Args:
            deal_id: The deal's unique identifier
            for_update: Lock the deal until the surrounding unit of work ends
                (backends without row locks ignore this)

        Returns:
            The deal if found, None otherwise

        Raises:
            LockTimeoutError: If ``for_update`` and the row lock is not
                granted in time
        """
        pass

    @abstractmethod
    async def find_by_category(
        self,
        path: CategoryPath,
        status: Optional[DealStatus] = None,
        sort_by: DealSortField = DealSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        after: Optional[DealCursor] = None,
        limit: int = 30,
    ) -> list[Deal]:
        """Find deals filed under a category or any of its descendants.

        Results are ordered by (sort key, id) in ``order`` and start strictly
        after ``after`` when given.

        Args:
            path: Category path (``/`` matches every deal)
            status: Only deals in this status (None for any status)
            sort_by: Sort field
            order: Sort direction
            after: Keyset position to continue from
            limit: Maximum number of deals to return

        Returns:
            Page of deals
        """
        pass

    @abstractmethod
    async def find_by_store(
        self,
        store_id: StoreId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Deal]:
        """Find a store's deals, newest first."""
        pass

    @abstractmethod
    async def find_active_created_before(
        self, cutoff: datetime, limit: int = 500
    ) -> list[Deal]:
        """Find ACTIVE deals created before ``cutoff``, oldest first."""
        pass

    @abstractmethod
    async def find_by_poster_store_title(
        self, posted_by: UserId, store_id: StoreId, title: str
    ) -> Optional[Deal]:
        """Find a deal by its natural key (used by the bulk loader)."""
        pass

    @abstractmethod
    async def count_by_poster(self, posted_by: UserId) -> int:
        """Count deals posted by a user."""
        pass

    @abstractmethod
    async def count_by_store(self, store_id: StoreId) -> int:
        """Count deals offered by a store."""
        pass

    @abstractmethod
    async def save(self, deal: Deal) -> Deal:
        """Save a deal (create or replace the whole record).

        Args:
            deal: The deal to save

        Returns:
            The saved deal
        """
        pass

    @abstractmethod
    async def increment_views(self, deal_id: DealId) -> bool:
        """Atomically add one view.

        Returns:
            True if the deal exists, False otherwise
        """
        pass
