"""Domain value objects for the deals marketplace.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from hotdeals.domain.value.common import RootValueObject, ValueObject

_SEGMENT = r"[a-z0-9]+(?:[-_][a-z0-9]+)*"
_PATH_RE = re.compile(rf"^/(?:{_SEGMENT}(?:/{_SEGMENT})*)?$")

ROOT_PATH = "/"


class CategoryPath(RootValueObject[str]):
    """Canonical slash-delimited category path.

    ``/`` is the implicit root. Every other path is one or more lowercase
    segments, e.g. ``/computers/video-cards`` or ``/free-shipping``.
    """

    @field_validator("root")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate path format."""
        if len(v) > 255:
            raise ValueError("Category path must be at most 255 characters")
        if not _PATH_RE.match(v):
            raise ValueError(
                "Category path must be '/' or slash-separated lowercase "
                "alphanumeric segments joined by '-' or '_'"
            )
        return v

    @classmethod
    def root_path(cls) -> "CategoryPath":
        return cls(ROOT_PATH)

    @property
    def is_root(self) -> bool:
        return self.root == ROOT_PATH

    @property
    def segments(self) -> list[str]:
        return [s for s in self.root.split("/") if s]

    @property
    def parent(self) -> "CategoryPath":
        """Structural parent (the root is its own parent)."""
        if self.is_root:
            return self
        head, _, _ = self.root.rpartition("/")
        return CategoryPath(head or ROOT_PATH)

    def is_descendant_of(self, ancestor: "CategoryPath") -> bool:
        """Whether this path lies strictly below ``ancestor``.

        Segment-aware, so ``/computers-x`` is not below ``/computers``.
        """
        if self == ancestor:
            return False
        if ancestor.is_root:
            return True
        return self.root.startswith(ancestor.root + "/")

    def is_within(self, ancestor: "CategoryPath") -> bool:
        """Whether this path equals ``ancestor`` or lies below it."""
        return self == ancestor or self.is_descendant_of(ancestor)


class CategoryIcon(ValueObject):
    """Icon reference for a category (opaque to the service)."""

    ligature: str = Field(min_length=1, max_length=100)  # glyph name
    font_family: str = Field(min_length=1, max_length=100)


class DealStatus(str, Enum):
    """Lifecycle state of a deal."""

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    REMOVED = "REMOVED"


class VoteDirection(str, Enum):
    """Vote request direction."""

    UP = "UP"
    DOWN = "DOWN"
    RETRACT = "RETRACT"


class ActorRole(str, Enum):
    """Capacity in which a caller changes deal status."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    SYSTEM = "SYSTEM"  # internal expiry scan


class DealSortField(str, Enum):
    """Sort key for deal listings."""

    SCORE = "score"
    CREATED_AT = "created_at"
    PRICE = "price"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class EntityKind(str, Enum):
    """Kinds of entity a deal may reference."""

    USER = "user"
    STORE = "store"
    CATEGORY = "category"
    TAG = "tag"
    DEAL = "deal"
