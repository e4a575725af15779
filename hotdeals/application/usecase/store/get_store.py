"""Get and list store use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import DealService, StoreService
from hotdeals.domain.value import StoreId

from .common import StoreItem


class GetStoreRequest(BaseModel):
    """Get store request."""

    store_id: str


class GetStoreResponse(StoreItem):
    """Get store response."""

    deal_count: int


class GetStoreUseCase:
    """Use case for reading a store with its deal count."""

    def __init__(self, store_service: StoreService, deal_service: DealService) -> None:
        """Initialize get store use case.

        Args:
            store_service: Store domain service
            deal_service: Deal domain service
        """
        self.store_service = store_service
        self.deal_service = deal_service

    async def execute(self, request: GetStoreRequest) -> GetStoreResponse:
        """Execute get store flow.

        Raises:
            NotFoundError: If store not found
        """
        store_id = StoreId(UUID(request.store_id))
        with logfire.span("get_store.execute", store_id=request.store_id):
            store = await self.store_service.get_store(store_id)
            deal_count = await self.deal_service.count_by_store(store_id)
            return GetStoreResponse(
                **StoreItem.from_store(store).model_dump(), deal_count=deal_count
            )


class ListStoresRequest(BaseModel):
    """List stores request."""

    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class ListStoresResponse(BaseModel):
    """List stores response."""

    stores: list[StoreItem]
    limit: int
    offset: int


class ListStoresUseCase:
    """Use case for listing stores by name."""

    def __init__(self, store_service: StoreService) -> None:
        self.store_service = store_service

    async def execute(self, request: ListStoresRequest) -> ListStoresResponse:
        stores = await self.store_service.list_stores(
            limit=request.limit, offset=request.offset
        )
        return ListStoresResponse(
            stores=[StoreItem.from_store(s) for s in stores],
            limit=request.limit,
            offset=request.offset,
        )
