"""Application layer DI providers."""

from dishka import Scope, provide

from hotdeals.application.usecase.category import (
    CreateCategoryUseCase,
    GetCategoryUseCase,
    ListTagsUseCase,
)
from hotdeals.application.usecase.deal import (
    ExpireDealsUseCase,
    GetDealUseCase,
    ListCategoryDealsUseCase,
    ListStoreDealsUseCase,
    PostDealUseCase,
    SetDealStatusUseCase,
    UpdateDealUseCase,
    VoteDealUseCase,
)
from hotdeals.application.usecase.seed import LoadSeedUseCase
from hotdeals.application.usecase.store import (
    CreateStoreUseCase,
    GetStoreUseCase,
    ListStoresUseCase,
    ReplaceStoreUseCase,
    UpdateStoreLogoUseCase,
)
from hotdeals.application.usecase.user import (
    CreateUserUseCase,
    GetUserUseCase,
    UpdateUserProfileUseCase,
)
from hotdeals.domain.service import (
    CategoryService,
    DealService,
    StoreService,
    UserService,
)
from hotdeals.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Category use cases
    @provide
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(category_service=category_service)

    @provide
    def get_get_category_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryUseCase:
        """Provide get category use case."""
        return GetCategoryUseCase(category_service=category_service)

    @provide
    def get_list_tags_use_case(
        self, category_service: CategoryService
    ) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(category_service=category_service)

    # Store use cases
    @provide
    def get_create_store_use_case(
        self, store_service: StoreService
    ) -> CreateStoreUseCase:
        """Provide create store use case."""
        return CreateStoreUseCase(store_service=store_service)

    @provide
    def get_get_store_use_case(
        self, store_service: StoreService, deal_service: DealService
    ) -> GetStoreUseCase:
        """Provide get store use case."""
        return GetStoreUseCase(store_service=store_service, deal_service=deal_service)

    @provide
    def get_list_stores_use_case(
        self, store_service: StoreService
    ) -> ListStoresUseCase:
        """Provide list stores use case."""
        return ListStoresUseCase(store_service=store_service)

    @provide
    def get_replace_store_use_case(
        self, store_service: StoreService
    ) -> ReplaceStoreUseCase:
        """Provide replace store use case."""
        return ReplaceStoreUseCase(store_service=store_service)

    @provide
    def get_update_store_logo_use_case(
        self, store_service: StoreService
    ) -> UpdateStoreLogoUseCase:
        """Provide update store logo use case."""
        return UpdateStoreLogoUseCase(store_service=store_service)

    # User use cases
    @provide
    def get_create_user_use_case(self, user_service: UserService) -> CreateUserUseCase:
        """Provide create user use case."""
        return CreateUserUseCase(user_service=user_service)

    @provide
    def get_get_user_use_case(
        self, user_service: UserService, deal_service: DealService
    ) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service, deal_service=deal_service)

    @provide
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Deal use cases
    @provide
    def get_post_deal_use_case(self, deal_service: DealService) -> PostDealUseCase:
        """Provide post deal use case."""
        return PostDealUseCase(deal_service=deal_service)

    @provide
    def get_get_deal_use_case(self, deal_service: DealService) -> GetDealUseCase:
        """Provide get deal use case."""
        return GetDealUseCase(deal_service=deal_service)

    @provide
    def get_vote_deal_use_case(self, deal_service: DealService) -> VoteDealUseCase:
        """Provide vote use case."""
        return VoteDealUseCase(deal_service=deal_service)

    @provide
    def get_update_deal_use_case(self, deal_service: DealService) -> UpdateDealUseCase:
        """Provide edit deal use case."""
        return UpdateDealUseCase(deal_service=deal_service)

    @provide
    def get_set_deal_status_use_case(
        self, deal_service: DealService
    ) -> SetDealStatusUseCase:
        """Provide set deal status use case."""
        return SetDealStatusUseCase(deal_service=deal_service)

    @provide
    def get_expire_deals_use_case(
        self, deal_service: DealService
    ) -> ExpireDealsUseCase:
        """Provide expiry scan use case."""
        return ExpireDealsUseCase(deal_service=deal_service)

    @provide
    def get_list_category_deals_use_case(
        self, deal_service: DealService
    ) -> ListCategoryDealsUseCase:
        """Provide category listing use case."""
        return ListCategoryDealsUseCase(deal_service=deal_service)

    @provide
    def get_list_store_deals_use_case(
        self, deal_service: DealService
    ) -> ListStoreDealsUseCase:
        """Provide store listing use case."""
        return ListStoreDealsUseCase(deal_service=deal_service)

    # Seed loading
    @provide
    def get_load_seed_use_case(
        self,
        category_service: CategoryService,
        store_service: StoreService,
        user_service: UserService,
        deal_service: DealService,
    ) -> LoadSeedUseCase:
        """Provide bulk seed loader use case."""
        return LoadSeedUseCase(
            category_service=category_service,
            store_service=store_service,
            user_service=user_service,
            deal_service=deal_service,
        )
