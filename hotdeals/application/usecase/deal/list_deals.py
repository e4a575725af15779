"""List deals use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import DealService
from hotdeals.domain.value import DealSortField, DealStatus, SortOrder, StoreId

from .common import DealItem


class ListCategoryDealsRequest(BaseModel):
    """List deals under a category."""

    path: str = "/"
    status: DealStatus | None = DealStatus.ACTIVE
    sort_by: DealSortField = DealSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    cursor: str | None = None
    limit: int | None = Field(default=None, ge=1)
    deadline: float | None = Field(default=None, gt=0)  # seconds
    viewer_id: str | None = None


class ListCategoryDealsResponse(BaseModel):
    """One page of a category listing."""

    deals: list[DealItem]
    next_cursor: str | None


class ListCategoryDealsUseCase:
    """Use case for browsing a category and its subcategories."""

    def __init__(self, deal_service: DealService) -> None:
        """Initialize list deals use case.

        Args:
            deal_service: Deal domain service
        """
        self.deal_service = deal_service

    async def execute(
        self, request: ListCategoryDealsRequest
    ) -> ListCategoryDealsResponse:
        """Execute list deals flow.

        Args:
            request: Listing filters, sort and cursor

        Returns:
            A page of deals with the cursor of the next page

        Raises:
            InvalidPathError: If the path is malformed
            NotFoundError: If the category does not exist
            InvalidCursorError: If the cursor is malformed or mismatched
            DeadlineExceededError: If the read outlives the deadline
        """
        with logfire.span(
            "list_category_deals.execute",
            path=request.path,
            sort_by=request.sort_by.value,
            order=request.order.value,
        ):
            page = await self.deal_service.list_by_category(
                request.path,
                status=request.status,
                sort_by=request.sort_by,
                order=request.order,
                cursor=request.cursor,
                limit=request.limit,
                deadline=request.deadline,
            )
            return ListCategoryDealsResponse(
                deals=[DealItem.from_deal(d, request.viewer_id) for d in page.deals],
                next_cursor=page.next_cursor,
            )


class ListStoreDealsRequest(BaseModel):
    """List a store's deals."""

    store_id: str
    status: DealStatus | None = DealStatus.ACTIVE
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class ListStoreDealsResponse(BaseModel):
    """A store's deals, newest first."""

    deals: list[DealItem]
    total: int
    offset: int


class ListStoreDealsUseCase:
    """Use case for listing a store's deals."""

    def __init__(self, deal_service: DealService) -> None:
        self.deal_service = deal_service

    async def execute(self, request: ListStoreDealsRequest) -> ListStoreDealsResponse:
        """Execute store listing flow.

        Raises:
            NotFoundError: If the store does not exist
        """
        store_id = StoreId(UUID(request.store_id))
        deals = await self.deal_service.list_by_store(
            store_id, status=request.status, limit=request.limit, offset=request.offset
        )
        total = await self.deal_service.count_by_store(store_id)
        return ListStoreDealsResponse(
            deals=[DealItem.from_deal(d) for d in deals],
            total=total,
            offset=request.offset,
        )
