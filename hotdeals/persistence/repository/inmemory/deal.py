"""In-memory deal repository for testing."""

from datetime import datetime
from typing import Optional

from hotdeals.domain.model import Deal
from hotdeals.domain.repository import DealRepository
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


class InMemoryDealRepository(DealRepository):
    """In-memory implementation of DealRepository for testing.

    Row locks are not modelled; callers serialize writes with KeyedLocks.
    """

    def __init__(self) -> None:
        self._deals: dict[DealId, Deal] = {}

    async def find_by_id(
        self, deal_id: DealId, for_update: bool = False
    ) -> Optional[Deal]:
        """Find a deal by ID."""
        return self._deals.get(deal_id)

    async def find_by_category(
        self,
        path: CategoryPath,
        status: Optional[DealStatus] = None,
        sort_by: DealSortField = DealSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        after: Optional[DealCursor] = None,
        limit: int = 30,
    ) -> list[Deal]:
        """Find deals under a category using keyset pagination."""
        deals = [
            d
            for d in self._deals.values()
            if d.category.is_within(path) and (status is None or d.status == status)
        ]
        descending = order == SortOrder.DESC
        deals.sort(key=lambda d: (d.sort_key(sort_by), d.id), reverse=descending)

        if after is not None:
            pivot = (after.key, after.deal_id)
            if descending:
                deals = [d for d in deals if (d.sort_key(sort_by), d.id) < pivot]
            else:
                deals = [d for d in deals if (d.sort_key(sort_by), d.id) > pivot]
        return deals[:limit]

    async def find_by_store(
        self,
        store_id: StoreId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Deal]:
        """Find a store's deals, newest first."""
        deals = [
            d
            for d in self._deals.values()
            if d.store == store_id and (status is None or d.status == status)
        ]
        deals.sort(key=lambda d: (d.created_at, d.id), reverse=True)
        return deals[offset : offset + limit]

    async def find_active_created_before(
        self, cutoff: datetime, limit: int = 500
    ) -> list[Deal]:
        """Find ACTIVE deals created before ``cutoff``, oldest first."""
        deals = [
            d
            for d in self._deals.values()
            if d.status == DealStatus.ACTIVE and d.created_at < cutoff
        ]
        deals.sort(key=lambda d: (d.created_at, d.id))
        return deals[:limit]

    async def find_by_poster_store_title(
        self, posted_by: UserId, store_id: StoreId, title: str
    ) -> Optional[Deal]:
        """Find a deal by poster, store and title."""
        return next(
            (
                d
                for d in self._deals.values()
                if d.posted_by == posted_by and d.store == store_id and d.title == title
            ),
            None,
        )

    async def count_by_poster(self, posted_by: UserId) -> int:
        """Count deals posted by a user."""
        return sum(1 for d in self._deals.values() if d.posted_by == posted_by)

    async def count_by_store(self, store_id: StoreId) -> int:
        """Count deals offered by a store."""
        return sum(1 for d in self._deals.values() if d.store == store_id)

    async def save(self, deal: Deal) -> Deal:
        """Save a deal (create or replace).

        The stored view count is kept; views only move via increment_views.
        """
        existing = self._deals.get(deal.id)
        if existing is not None and existing.views != deal.views:
            deal = deal.model_copy(update={"views": existing.views})
        self._deals[deal.id] = deal
        return deal

    async def increment_views(self, deal_id: DealId) -> bool:
        """Add one view."""
        deal = self._deals.get(deal_id)
        if deal is None:
            return False
        self._deals[deal_id] = deal.model_copy(update={"views": deal.views + 1})
        return True
