"""Strongly typed identifiers for marketplace domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting. Values are UUIDv7, so they sort
by creation time (see ``hotdeals.util.ids``).
"""

from typing import NewType
from uuid import UUID

CategoryId = NewType("CategoryId", UUID)
StoreId = NewType("StoreId", UUID)
UserId = NewType("UserId", UUID)
DealId = NewType("DealId", UUID)
