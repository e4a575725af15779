"""Mock persistence providers for testing."""

from dishka import Scope, provide

from hotdeals.domain.repository import (
    CategoryRepository,
    DealRepository,
    StoreRepository,
    UserRepository,
)
from hotdeals.persistence.repository.inmemory import (
    InMemoryCategoryRepository,
    InMemoryDealRepository,
    InMemoryStoreRepository,
    InMemoryUserRepository,
)
from hotdeals.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so every request served by one container sees the same
    data (E2E tests issue many requests). Each test builds its own
    container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_category_repository(self) -> CategoryRepository:
        """Provide in-memory category repository."""
        return InMemoryCategoryRepository()

    @provide(scope=Scope.APP)
    def get_store_repository(self) -> StoreRepository:
        """Provide in-memory store repository."""
        return InMemoryStoreRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_deal_repository(self) -> DealRepository:
        """Provide in-memory deal repository."""
        return InMemoryDealRepository()
