"""Shared deal response models."""

from datetime import datetime

from pydantic import BaseModel

from hotdeals.domain.model import Deal
from hotdeals.domain.value import DealStatus


class DealItem(BaseModel):
    """Deal in responses.

    Voter sets are reported as counts; ``my_vote`` is filled in when the
    caller is known.
    """

    deal_id: str
    posted_by: str
    store_id: str
    category: str
    title: str
    description: str
    original_price: float
    price: float
    deal_score: int
    upvotes: int
    downvotes: int
    my_vote: str | None = None  # "UP", "DOWN" or None
    status: DealStatus
    photos: list[str]
    cover_photo: str | None
    deal_url: str | None
    tags: list[str]
    location: str | None
    views: int
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_deal(cls, deal: Deal, viewer_id: str | None = None) -> "DealItem":
        my_vote = None
        if viewer_id is not None:
            if any(str(u) == viewer_id for u in deal.upvoters):
                my_vote = "UP"
            elif any(str(u) == viewer_id for u in deal.downvoters):
                my_vote = "DOWN"
        return cls(
            deal_id=str(deal.id),
            posted_by=str(deal.posted_by),
            store_id=str(deal.store),
            category=deal.category.root,
            title=deal.title,
            description=deal.description,
            original_price=deal.original_price,
            price=deal.price,
            deal_score=deal.deal_score,
            upvotes=len(deal.upvoters),
            downvotes=len(deal.downvoters),
            my_vote=my_vote,
            status=deal.status,
            photos=list(deal.photos),
            cover_photo=deal.cover_photo,
            deal_url=deal.deal_url,
            tags=[t.root for t in deal.tags],
            location=deal.location,
            views=deal.views,
            created_at=deal.created_at,
            updated_at=deal.updated_at,
        )
