"""Post deal use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import DealService
from hotdeals.domain.value import StoreId, UserId

from .common import DealItem


class PostDealRequest(BaseModel):
    """Post deal request."""

    posted_by: str  # User ID from the caller header
    store_id: str
    category: str
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=3000)
    original_price: float
    price: float
    photos: list[str] = Field(default_factory=list)
    cover_photo: str | None = None
    tags: list[str] = Field(default_factory=list)
    location: str | None = None
    deal_url: str | None = None


class PostDealUseCase:
    """Use case for posting a new deal."""

    def __init__(self, deal_service: DealService) -> None:
        """Initialize post deal use case.

        Args:
            deal_service: Deal domain service
        """
        self.deal_service = deal_service

    async def execute(self, request: PostDealRequest) -> DealItem:
        """Execute post deal flow.

        Args:
            request: Post deal request

        Returns:
            Created deal

        Raises:
            InvalidPriceError: If a price is negative
            UnresolvedReferenceError: If the poster, store, category or a tag
                does not resolve
        """
        with logfire.span(
            "post_deal.execute", title=request.title, category=request.category
        ):
            deal = await self.deal_service.post_deal(
                posted_by=UserId(UUID(request.posted_by)),
                store=StoreId(UUID(request.store_id)),
                category=request.category,
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
            return DealItem.from_deal(deal, viewer_id=request.posted_by)
