"""Domain value objects for the deals marketplace."""

from hotdeals.domain.value.cursor import DealCursor
from hotdeals.domain.value.identifiers import CategoryId, DealId, StoreId, UserId
from hotdeals.domain.value.timestamps import UtcDatetime, as_utc, utc_now
from hotdeals.domain.value.types import (
    ROOT_PATH,
    ActorRole,
    CategoryIcon,
    CategoryPath,
    DealSortField,
    DealStatus,
    EntityKind,
    SortOrder,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "CategoryId",
    "DealId",
    "StoreId",
    "UserId",
    # Types
    "ROOT_PATH",
    "ActorRole",
    "CategoryIcon",
    "CategoryPath",
    "DealCursor",
    "DealSortField",
    "DealStatus",
    "EntityKind",
    "SortOrder",
    "VoteDirection",
    # Time
    "UtcDatetime",
    "as_utc",
    "utc_now",
]
