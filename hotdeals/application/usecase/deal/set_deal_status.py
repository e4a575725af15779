"""Deal lifecycle use cases."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from hotdeals.domain.service import DealService
from hotdeals.domain.value import ActorRole, DealId, DealStatus

from ..base import BaseUseCase
from .common import DealItem


class SetDealStatusRequest(BaseModel):
    """Set deal status request."""

    deal_id: str
    status: DealStatus
    actor_role: ActorRole = ActorRole.USER


class SetDealStatusUseCase:
    """Use case for moving a deal through its lifecycle."""

    def __init__(self, deal_service: DealService) -> None:
        """Initialize set status use case.

        Args:
            deal_service: Deal domain service
        """
        self.deal_service = deal_service

    async def execute(self, request: SetDealStatusRequest) -> DealItem:
        """Execute set status flow.

        Raises:
            NotFoundError: If the deal does not exist
            IllegalTransitionError: If the lifecycle forbids the move
            NotAuthorizedError: If the role may not make the move
        """
        deal = await self.deal_service.set_status(
            DealId(UUID(request.deal_id)), request.status, request.actor_role
        )
        return DealItem.from_deal(deal)


class ExpireDealsRequest(BaseModel):
    """Expiry scan request."""

    cutoff: datetime | None = None  # Defaults to the configured age


class ExpireDealsResponse(BaseModel):
    """Expiry scan response."""

    expired: list[str]


class ExpireDealsUseCase(BaseUseCase[ExpireDealsRequest, ExpireDealsResponse]):
    """Use case for the periodic expiry scan (runs as the system actor)."""

    def __init__(self, deal_service: DealService) -> None:
        self.deal_service = deal_service

    async def execute(self, request: ExpireDealsRequest) -> ExpireDealsResponse:
        with logfire.span("expire_deals.execute"):
            expired = await self.deal_service.expire_stale(request.cutoff)
            return ExpireDealsResponse(expired=[str(d) for d in expired])
