"""Shared store response models."""

from datetime import datetime

from pydantic import BaseModel

from hotdeals.domain.model import Store


class StoreItem(BaseModel):
    """Store in responses."""

    store_id: str
    name: str
    logo: str | None
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_store(cls, store: Store) -> "StoreItem":
        return cls(
            store_id=str(store.id),
            name=store.name,
            logo=store.logo,
            created_at=store.created_at,
            updated_at=store.updated_at,
        )
