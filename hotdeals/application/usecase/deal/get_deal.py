"""Get deal use case."""

from uuid import UUID

from pydantic import BaseModel

from hotdeals.domain.service import DealService
from hotdeals.domain.value import DealId

from .common import DealItem


class GetDealRequest(BaseModel):
    """Get deal request."""

    deal_id: str
    viewer_id: str | None = None  # Caller, if known


class GetDealUseCase:
    """Use case for opening a deal.

    Opening a deal counts as a view. The view is recorded after the read,
    so the returned count does not include it.
    """

    def __init__(self, deal_service: DealService) -> None:
        """Initialize get deal use case.

        Args:
            deal_service: Deal domain service
        """
        self.deal_service = deal_service

    async def execute(self, request: GetDealRequest) -> DealItem:
        """Execute get deal flow.

        Raises:
            NotFoundError: If the deal does not exist or is REMOVED
        """
        deal_id = DealId(UUID(request.deal_id))
        deal = await self.deal_service.get_deal(deal_id)
        await self.deal_service.record_view(deal_id)
        return DealItem.from_deal(deal, viewer_id=request.viewer_id)
