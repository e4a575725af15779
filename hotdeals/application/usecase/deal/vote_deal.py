"""Vote on deal use case."""

from uuid import UUID

from pydantic import BaseModel

from hotdeals.domain.service import DealService
from hotdeals.domain.value import DealId, UserId, VoteDirection

from .common import DealItem


class VoteDealRequest(BaseModel):
    """Vote request."""

    deal_id: str
    user_id: str  # Voter from the caller header
    direction: VoteDirection


class VoteDealUseCase:
    """Use case for voting on a deal."""

    def __init__(self, deal_service: DealService) -> None:
        """Initialize vote use case.

        Args:
            deal_service: Deal domain service
        """
        self.deal_service = deal_service

    async def execute(self, request: VoteDealRequest) -> DealItem:
        """Execute vote flow.

        Args:
            request: Vote request

        Returns:
            The deal after the vote

        Raises:
            NotFoundError: If the deal does not exist or is REMOVED
            UnresolvedReferenceError: If the voter does not exist
            LockTimeoutError: If the deal stays locked too long
        """
        deal = await self.deal_service.vote(
            DealId(UUID(request.deal_id)),
            UserId(UUID(request.user_id)),
            request.direction,
        )
        return DealItem.from_deal(deal, viewer_id=request.user_id)
