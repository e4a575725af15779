"""User aggregate root.

Each user is bound to exactly one external authentication identity (``uid``).
"""

from typing import Optional

from pydantic import Field

from hotdeals.domain.model.common import DomainModel
from hotdeals.domain.value import UserId, UtcDatetime, utc_now


class User(DomainModel):
    """Marketplace user."""

    id: UserId
    uid: str = Field(min_length=1, max_length=128)  # external identity
    email: Optional[str] = None  # secondary lookup, not guaranteed unique
    nickname: str = Field(min_length=1, max_length=50)
    avatar: Optional[str] = None  # avatar URL
    created_at: UtcDatetime = Field(default_factory=utc_now)
    updated_at: Optional[UtcDatetime] = None
