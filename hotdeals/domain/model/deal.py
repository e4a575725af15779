"""Deal aggregate root.

A deal is a discount listing posted by a user for a store, filed under a
category and optionally labelled with tags. Community voting keeps two
disjoint voter sets; the score is derived from them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from hotdeals.domain.model.common import DomainModel
from hotdeals.domain.value import (
    CategoryPath,
    DealId,
    DealSortField,
    DealStatus,
    StoreId,
    UserId,
    UtcDatetime,
    VoteDirection,
    utc_now,
)

# Allowed lifecycle moves; REMOVED is terminal
TRANSITIONS: dict[DealStatus, frozenset[DealStatus]] = {
    DealStatus.ACTIVE: frozenset({DealStatus.EXPIRED, DealStatus.REMOVED}),
    DealStatus.EXPIRED: frozenset({DealStatus.REMOVED}),
    DealStatus.REMOVED: frozenset(),
}


class Deal(DomainModel):
    """Deal aggregate root.

    Business rules:
    - a user is in at most one of ``upvoters``/``downvoters``
    - ``posted_by``, ``store`` and ``category`` never change
    - ``views`` never decreases
    """

    id: DealId
    posted_by: UserId
    store: StoreId
    category: CategoryPath
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=3000)
    original_price: float = Field(ge=0)
    price: float = Field(ge=0)
    deal_score: int = 0
    upvoters: frozenset[UserId] = frozenset()
    downvoters: frozenset[UserId] = frozenset()
    status: DealStatus = DealStatus.ACTIVE
    photos: tuple[str, ...] = ()
    cover_photo: Optional[str] = None
    deal_url: Optional[str] = None
    tags: tuple[CategoryPath, ...] = ()
    location: Optional[str] = None  # e.g. in-store aisle
    views: int = Field(default=0, ge=0)
    created_at: UtcDatetime = Field(default_factory=utc_now)
    updated_at: Optional[UtcDatetime] = None

    @model_validator(mode="after")
    def validate_voters_disjoint(self) -> "Deal":
        """Validate no user is both an upvoter and a downvoter."""
        overlap = self.upvoters & self.downvoters
        if overlap:
            raise ValueError(
                f"Users cannot both upvote and downvote: {sorted(map(str, overlap))}"
            )
        return self

    @property
    def price_exceeds_original(self) -> bool:
        return self.price > self.original_price

    def can_transition_to(self, status: DealStatus) -> bool:
        return status in TRANSITIONS[self.status]

    def sort_key(self, field: DealSortField) -> int | float | datetime:
        """Value of this deal for a listing sort field."""
        if field == DealSortField.SCORE:
            return self.deal_score
        if field == DealSortField.PRICE:
            return self.price
        return self.created_at

    def with_vote(self, user_id: UserId, direction: VoteDirection) -> "Deal":
        """Apply a vote, returning the resulting deal (may be ``self``).

        Repeating a vote in the same direction is a no-op; voting the other
        way moves the user across; RETRACT clears any vote. The score is
        always recomputed from the voter sets.
        """
        upvoters = set(self.upvoters)
        downvoters = set(self.downvoters)

        if direction == VoteDirection.UP:
            downvoters.discard(user_id)
            upvoters.add(user_id)
        elif direction == VoteDirection.DOWN:
            upvoters.discard(user_id)
            downvoters.add(user_id)
        else:
            upvoters.discard(user_id)
            downvoters.discard(user_id)

        score = len(upvoters) - len(downvoters)
        if (
            upvoters == self.upvoters
            and downvoters == self.downvoters
            and score == self.deal_score
        ):
            return self

        return self.model_copy(
            update={
                "upvoters": frozenset(upvoters),
                "downvoters": frozenset(downvoters),
                "deal_score": score,
                "updated_at": utc_now(),
            }
        )
