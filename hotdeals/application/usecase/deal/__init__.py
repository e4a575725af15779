"""Deal use cases."""

from .common import DealItem
from .get_deal import GetDealRequest, GetDealUseCase
from .list_deals import (
    ListCategoryDealsRequest,
    ListCategoryDealsResponse,
    ListCategoryDealsUseCase,
    ListStoreDealsRequest,
    ListStoreDealsResponse,
    ListStoreDealsUseCase,
)
from .post_deal import PostDealRequest, PostDealUseCase
from .set_deal_status import (
    ExpireDealsRequest,
    ExpireDealsResponse,
    ExpireDealsUseCase,
    SetDealStatusRequest,
    SetDealStatusUseCase,
)
from .update_deal import UpdateDealRequest, UpdateDealUseCase
from .vote_deal import VoteDealRequest, VoteDealUseCase

__all__ = [
    "DealItem",
    "ExpireDealsRequest",
    "ExpireDealsResponse",
    "ExpireDealsUseCase",
    "GetDealRequest",
    "GetDealUseCase",
    "ListCategoryDealsRequest",
    "ListCategoryDealsResponse",
    "ListCategoryDealsUseCase",
    "ListStoreDealsRequest",
    "ListStoreDealsResponse",
    "ListStoreDealsUseCase",
    "PostDealRequest",
    "PostDealUseCase",
    "SetDealStatusRequest",
    "SetDealStatusUseCase",
    "UpdateDealRequest",
    "UpdateDealUseCase",
    "VoteDealRequest",
    "VoteDealUseCase",
]
