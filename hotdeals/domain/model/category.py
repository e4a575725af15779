"""Category entity.

Categories form a forest keyed by canonical path. A category flagged as a
tag labels deals across the browsing hierarchy instead of placing them in it.
"""

from typing import Optional

from pydantic import Field, model_validator

from hotdeals.domain.model.common import DomainModel
from hotdeals.domain.value import (
    CategoryIcon,
    CategoryId,
    CategoryPath,
    UtcDatetime,
    utc_now,
)


class Category(DomainModel):
    """Category or tag.

    Business rules:
    - ``path`` is unique and never changes
    - ``parent`` is the structural parent of ``path`` (``/`` for top level)
    - at least one localized name
    """

    id: CategoryId
    path: CategoryPath
    parent: CategoryPath
    names: dict[str, str] = Field(min_length=1)  # locale code -> display name
    icon: Optional[CategoryIcon] = None
    is_tag: bool = False
    created_at: UtcDatetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_parent(self) -> "Category":
        """Validate the path sits directly under its parent."""
        if self.path.is_root:
            raise ValueError("The root path cannot be stored as a category")
        if self.path.parent != self.parent:
            raise ValueError(
                f"Parent of {self.path.root} must be {self.path.parent.root}"
            )
        return self

    def display_name(self, locale: str, fallback: str = "en") -> str:
        """Name for ``locale``, falling back to ``fallback`` then any name."""
        if locale in self.names:
            return self.names[locale]
        if fallback in self.names:
            return self.names[fallback]
        return next(iter(self.names.values()))
