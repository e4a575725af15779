"""PostgreSQL repository implementations."""

from hotdeals.persistence.repository.category import PostgresCategoryRepository
from hotdeals.persistence.repository.deal import PostgresDealRepository
from hotdeals.persistence.repository.store import PostgresStoreRepository
from hotdeals.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresDealRepository",
    "PostgresStoreRepository",
    "PostgresUserRepository",
]
