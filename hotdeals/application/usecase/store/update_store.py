"""Replace store and update logo use cases."""

from uuid import UUID

from pydantic import BaseModel, Field

from hotdeals.domain.service import StoreService
from hotdeals.domain.value import StoreId

from .common import StoreItem


class ReplaceStoreRequest(BaseModel):
    """Replace store request (the whole record)."""

    store_id: str
    name: str = Field(min_length=1, max_length=100)
    logo: str | None = None


class ReplaceStoreUseCase:
    """Use case for replacing a store record (last write wins)."""

    def __init__(self, store_service: StoreService) -> None:
        """Initialize replace store use case.

        Args:
            store_service: Store domain service
        """
        self.store_service = store_service

    async def execute(self, request: ReplaceStoreRequest) -> StoreItem:
        """Execute replace store flow.

        Raises:
            NotFoundError: If store not found
        """
        store = await self.store_service.replace_store(
            StoreId(UUID(request.store_id)), request.name, request.logo
        )
        return StoreItem.from_store(store)


class UpdateStoreLogoRequest(BaseModel):
    """Update store logo request."""

    store_id: str
    logo: str | None


class UpdateStoreLogoUseCase:
    """Use case for changing a store's logo."""

    def __init__(self, store_service: StoreService) -> None:
        self.store_service = store_service

    async def execute(self, request: UpdateStoreLogoRequest) -> StoreItem:
        store = await self.store_service.update_logo(
            StoreId(UUID(request.store_id)), request.logo
        )
        return StoreItem.from_store(store)
