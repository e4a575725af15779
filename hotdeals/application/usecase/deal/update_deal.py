"""Edit deal use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import DealService
from hotdeals.domain.value import DealId, UserId

from .common import DealItem


class UpdateDealRequest(BaseModel):
    """Edit request. Omitted fields keep their value."""

    deal_id: str
    editor_id: str  # User ID from the caller header
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = Field(default=None, min_length=1, max_length=3000)
    original_price: float | None = None
    price: float | None = None
    photos: list[str] | None = None
    cover_photo: str | None = None
    tags: list[str] | None = None
    location: str | None = None
    deal_url: str | None = None


class UpdateDealUseCase:
    """Use case for a poster editing their deal."""

    def __init__(self, deal_service: DealService) -> None:
        self.deal_service = deal_service

    async def execute(self, request: UpdateDealRequest) -> DealItem:
        """Execute edit flow.

        Raises:
            NotFoundError: If the deal does not exist or is REMOVED
            NotAuthorizedError: If the caller did not post the deal
            InvalidPriceError: If a resulting price is negative
            UnresolvedReferenceError: If a new tag does not resolve
        """
        with logfire.span("update_deal.execute", deal_id=request.deal_id):
            deal = await self.deal_service.update_deal(
                DealId(UUID(request.deal_id)),
                UserId(UUID(request.editor_id)),
                title=request.title,
                description=request.description,
                original_price=request.original_price,
                price=request.price,
                photos=request.photos,
                cover_photo=request.cover_photo,
                tags=request.tags,
                location=request.location,
                deal_url=request.deal_url,
            )
            return DealItem.from_deal(deal, viewer_id=request.editor_id)
