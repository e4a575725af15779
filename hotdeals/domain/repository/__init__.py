"""Repository interfaces for the deals marketplace.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from hotdeals.domain.repository.category import CategoryRepository
from hotdeals.domain.repository.deal import DealRepository
from hotdeals.domain.repository.store import StoreRepository
from hotdeals.domain.repository.user import UserRepository

__all__ = [
    "CategoryRepository",
    "DealRepository",
    "StoreRepository",
    "UserRepository",
]
