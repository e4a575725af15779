"""Store use cases."""

from .common import StoreItem
from .create_store import CreateStoreRequest, CreateStoreUseCase
from .get_store import (
    GetStoreRequest,
    GetStoreResponse,
    GetStoreUseCase,
    ListStoresRequest,
    ListStoresResponse,
    ListStoresUseCase,
)
from .update_store import (
    ReplaceStoreRequest,
    ReplaceStoreUseCase,
    UpdateStoreLogoRequest,
    UpdateStoreLogoUseCase,
)

__all__ = [
    "CreateStoreRequest",
    "CreateStoreUseCase",
    "GetStoreRequest",
    "GetStoreResponse",
    "GetStoreUseCase",
    "ListStoresRequest",
    "ListStoresResponse",
    "ListStoresUseCase",
    "ReplaceStoreRequest",
    "ReplaceStoreUseCase",
    "StoreItem",
    "UpdateStoreLogoRequest",
    "UpdateStoreLogoUseCase",
]
