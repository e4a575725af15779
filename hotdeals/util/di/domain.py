"""Domain layer DI providers."""

from dishka import Scope, provide

from hotdeals.config import LedgerSettings
from hotdeals.domain.repository import (
    CategoryRepository,
    DealRepository,
    StoreRepository,
    UserRepository,
)
from hotdeals.domain.service import (
    CategoryService,
    DealService,
    ReferenceService,
    StoreService,
    UserService,
)
from hotdeals.util.di.base import ProviderBase
from hotdeals.util.locking import KeyedLocks


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction;
    the lock registry they share is APP-scoped.
    """

    scope = Scope.REQUEST

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        locks: KeyedLocks,
        ledger_settings: LedgerSettings,
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository,
            locks=locks,
            ledger_settings=ledger_settings,
        )

    @provide
    def get_store_service(
        self, store_repository: StoreRepository, locks: KeyedLocks
    ) -> StoreService:
        """Provide store domain service."""
        return StoreService(store_repository=store_repository, locks=locks)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, locks: KeyedLocks
    ) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository, locks=locks)

    @provide
    def get_reference_service(
        self,
        user_repository: UserRepository,
        store_repository: StoreRepository,
        category_repository: CategoryRepository,
        deal_repository: DealRepository,
    ) -> ReferenceService:
        """Provide reference resolution service."""
        return ReferenceService(
            user_repository=user_repository,
            store_repository=store_repository,
            category_repository=category_repository,
            deal_repository=deal_repository,
        )

    @provide
    def get_deal_service(
        self,
        deal_repository: DealRepository,
        reference_service: ReferenceService,
        category_service: CategoryService,
        locks: KeyedLocks,
        ledger_settings: LedgerSettings,
    ) -> DealService:
        """Provide deal ledger domain service."""
        return DealService(
            deal_repository=deal_repository,
            reference_service=reference_service,
            category_service=category_service,
            locks=locks,
            ledger_settings=ledger_settings,
        )
