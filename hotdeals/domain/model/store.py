"""Store entity."""

from typing import Optional

from pydantic import Field

from hotdeals.domain.model.common import DomainModel
from hotdeals.domain.value import StoreId, UtcDatetime, utc_now


class Store(DomainModel):
    """Merchant a deal is offered by.

    Updates are whole-record replacements keyed by id (last write wins).
    """

    id: StoreId
    name: str = Field(min_length=1, max_length=100)
    logo: Optional[str] = None  # logo URL
    created_at: UtcDatetime = Field(default_factory=utc_now)
    updated_at: Optional[UtcDatetime] = None
