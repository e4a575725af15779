"""Shared category response models."""

from datetime import datetime

from pydantic import BaseModel

from hotdeals.domain.model import Category


class CategoryIconItem(BaseModel):
    """Category icon in responses."""

    ligature: str
    font_family: str


class CategoryItem(BaseModel):
    """Category in responses."""

    category_id: str
    path: str
    parent: str
    names: dict[str, str]
    icon: CategoryIconItem | None
    is_tag: bool
    created_at: datetime

    @classmethod
    def from_category(cls, category: Category) -> "CategoryItem":
        return cls(
            category_id=str(category.id),
            path=category.path.root,
            parent=category.parent.root,
            names=dict(category.names),
            icon=(
                CategoryIconItem(**category.icon.model_dump()) if category.icon else None
            ),
            is_tag=category.is_tag,
            created_at=category.created_at,
        )
