"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .deal import InMemoryDealRepository
from .store import InMemoryStoreRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryDealRepository",
    "InMemoryStoreRepository",
    "InMemoryUserRepository",
]
