"""PostgreSQL implementation of Store repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from hotdeals.domain.model import Store
from hotdeals.domain.repository import StoreRepository
from hotdeals.domain.value import StoreId
from hotdeals.persistence.mappers import row_to_store, store_to_dict
from hotdeals.persistence.tables import stores_table


class PostgresStoreRepository(StoreRepository):
    """PostgreSQL implementation of StoreRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, store_id: StoreId) -> Optional[Store]:
        """Find a store by ID."""
        with logfire.span("store_repository.find_by_id", store_id=str(store_id)):
            stmt = select(stores_table).where(stores_table.c.id == store_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_store(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Store]:
        """Find the oldest store with this name."""
        with logfire.span("store_repository.find_by_name", name=name):
            stmt = (
                select(stores_table)
                .where(stores_table.c.name == name)
                .order_by(stores_table.c.created_at, stores_table.c.id)
                .limit(1)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_store(row._asdict()) if row else None

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Store]:
        """List stores ordered by name."""
        with logfire.span("store_repository.find_all", limit=limit, offset=offset):
            stmt = (
                select(stores_table)
                .order_by(stores_table.c.name, stores_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_store(row._asdict()) for row in result.fetchall()]

    async def save(self, store: Store) -> Store:
        """Save a store (create or replace)."""
        with logfire.span("store_repository.save", store_id=str(store.id)):
            values = store_to_dict(store)
            stmt = pg_insert(stores_table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[stores_table.c.id],
                set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
            )
            await self.session.execute(stmt)
            await self.session.flush()
            logfire.info("Store saved", store_id=str(store.id))
            return store
