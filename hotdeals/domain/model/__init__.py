"""Domain model entities for the deals marketplace."""

from hotdeals.domain.model.category import Category
from hotdeals.domain.model.deal import Deal
from hotdeals.domain.model.store import Store
from hotdeals.domain.model.user import User

__all__ = [
    "Category",
    "Deal",
    "Store",
    "User",
]
