"""PostgreSQL implementation of Deal repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import and_, func, or_, select, text, tuple_, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from hotdeals.config import LedgerSettings
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
from hotdeals.persistence.database import is_lock_timeout
from hotdeals.persistence.mappers import deal_to_dict, row_to_deal
from hotdeals.persistence.tables import deals_table
from hotdeals.util.error import LockTimeoutError

_SORT_COLUMNS = {
    DealSortField.SCORE: deals_table.c.deal_score,
    DealSortField.CREATED_AT: deals_table.c.created_at,
    DealSortField.PRICE: deals_table.c.price,
}


def _within(path: CategoryPath):
    """Filter matching a category and its descendants."""
    return or_(
        deals_table.c.category == path.root,
        deals_table.c.category.startswith(path.root + "/", autoescape=True),
    )


class PostgresDealRepository(DealRepository):
    """PostgreSQL implementation of DealRepository."""

    def __init__(self, session: AsyncSession, ledger_settings: LedgerSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            ledger_settings: Ledger settings (row lock timeout)
        """
        self.session = session
        self.ledger_settings = ledger_settings

    async def find_by_id(
        self, deal_id: DealId, for_update: bool = False
    ) -> Optional[Deal]:
        """Find a deal by ID, optionally locking its row."""
        with logfire.span(
            "deal_repository.find_by_id", deal_id=str(deal_id), for_update=for_update
        ):
            stmt = select(deals_table).where(deals_table.c.id == deal_id)
            if for_update:
                timeout_ms = int(self.ledger_settings.lock_timeout_seconds * 1000)
                await self.session.execute(
                    text(f"SET LOCAL lock_timeout = '{timeout_ms}ms'")
                )
                stmt = stmt.with_for_update()
            try:
                result = await self.session.execute(stmt)
            except DBAPIError as e:
                if is_lock_timeout(e):
                    logfire.warn("Deal row lock timed out", deal_id=str(deal_id))
                    raise LockTimeoutError(
                        f"deal:{deal_id}", self.ledger_settings.lock_timeout_seconds
                    ) from e
                raise
            row = result.fetchone()
            return row_to_deal(row._asdict()) if row else None

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
        with logfire.span(
            "deal_repository.find_by_category",
            path=path.root,
            sort_by=sort_by.value,
            order=order.value,
            limit=limit,
        ):
            column = _SORT_COLUMNS[sort_by]
            stmt = select(deals_table)
            if not path.is_root:
                stmt = stmt.where(_within(path))
            if status is not None:
                stmt = stmt.where(deals_table.c.status == status.value)

            position = tuple_(column, deals_table.c.id)
            if order == SortOrder.DESC:
                if after is not None:
                    stmt = stmt.where(position < tuple_(after.key, after.deal_id))
                stmt = stmt.order_by(column.desc(), deals_table.c.id.desc())
            else:
                if after is not None:
                    stmt = stmt.where(position > tuple_(after.key, after.deal_id))
                stmt = stmt.order_by(column.asc(), deals_table.c.id.asc())

            result = await self.session.execute(stmt.limit(limit))
            return [row_to_deal(row._asdict()) for row in result.fetchall()]

    async def find_by_store(
        self,
        store_id: StoreId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Deal]:
        """Find a store's deals, newest first."""
        with logfire.span("deal_repository.find_by_store", store_id=str(store_id)):
            stmt = select(deals_table).where(deals_table.c.store_id == store_id)
            if status is not None:
                stmt = stmt.where(deals_table.c.status == status.value)
            stmt = (
                stmt.order_by(deals_table.c.created_at.desc(), deals_table.c.id.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_deal(row._asdict()) for row in result.fetchall()]

    async def find_active_created_before(
        self, cutoff: datetime, limit: int = 500
    ) -> list[Deal]:
        """Find ACTIVE deals created before ``cutoff``, oldest first."""
        with logfire.span(
            "deal_repository.find_active_created_before", cutoff=cutoff.isoformat()
        ):
            stmt = (
                select(deals_table)
                .where(
                    and_(
                        deals_table.c.status == DealStatus.ACTIVE.value,
                        deals_table.c.created_at < cutoff,
                    )
                )
                .order_by(deals_table.c.created_at, deals_table.c.id)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [row_to_deal(row._asdict()) for row in result.fetchall()]

    async def find_by_poster_store_title(
        self, posted_by: UserId, store_id: StoreId, title: str
    ) -> Optional[Deal]:
        """Find a deal by poster, store and title."""
        stmt = (
            select(deals_table)
            .where(
                deals_table.c.posted_by == posted_by,
                deals_table.c.store_id == store_id,
                deals_table.c.title == title,
            )
            .order_by(deals_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_deal(row._asdict()) if row else None

    async def count_by_poster(self, posted_by: UserId) -> int:
        """Count deals posted by a user."""
        stmt = (
            select(func.count())
            .select_from(deals_table)
            .where(deals_table.c.posted_by == posted_by)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_store(self, store_id: StoreId) -> int:
        """Count deals offered by a store."""
        stmt = (
            select(func.count())
            .select_from(deals_table)
            .where(deals_table.c.store_id == store_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, deal: Deal) -> Deal:
        """Save a deal (create or replace).

        Returns the stored row, whose view count may be ahead of ``deal``.
        """
        with logfire.span(
            "deal_repository.save", deal_id=str(deal.id), status=deal.status.value
        ):
            values = deal_to_dict(deal)
            stmt = pg_insert(deals_table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[deals_table.c.id],
                set_={
                    k: v
                    for k, v in values.items()
                    # identity fields are immutable; views only move via increment
                    if k not in ("id", "posted_by", "store_id", "category", "created_at", "views")
                },
            )
            result = await self.session.execute(stmt.returning(deals_table))
            await self.session.flush()
            logfire.info("Deal saved", deal_id=str(deal.id))
            return row_to_deal(result.fetchone()._asdict())

    async def increment_views(self, deal_id: DealId) -> bool:
        """Atomically add one view.

        Runs in a savepoint: a failed increment rolls back on its own and
        leaves the request transaction usable.
        """
        stmt = (
            update(deals_table)
            .where(deals_table.c.id == deal_id)
            .values(views=deals_table.c.views + 1)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return (result.rowcount or 0) > 0
