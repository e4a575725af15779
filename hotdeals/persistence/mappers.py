"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from hotdeals.domain.model import Category, Deal, Store, User
from hotdeals.domain.value import (
    CategoryIcon,
    CategoryId,
    CategoryPath,
    DealId,
    DealStatus,
    StoreId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model.

    Args:
        row: Database row as dict

    Returns:
        Category domain model
    """
    return Category(
        id=CategoryId(_uuid(row["id"])),
        path=CategoryPath(row["path"]),
        parent=CategoryPath(row["parent"]),
        names=dict(row["names"]),
        icon=CategoryIcon(**row["icon"]) if row.get("icon") else None,
        is_tag=row["is_tag"],
        created_at=row["created_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict."""
    return {
        "id": category.id,
        "path": category.path.root,
        "parent": category.parent.root,
        "names": dict(category.names),
        "icon": category.icon.model_dump() if category.icon else None,
        "is_tag": category.is_tag,
        "created_at": category.created_at,
    }


def row_to_store(row: Dict[str, Any]) -> Store:
    """Convert database row to Store domain model."""
    return Store(
        id=StoreId(_uuid(row["id"])),
        name=row["name"],
        logo=row.get("logo"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def store_to_dict(store: Store) -> Dict[str, Any]:
    """Convert Store domain model to database dict."""
    return store.model_dump()


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        uid=row["uid"],
        email=row.get("email"),
        nickname=row["nickname"],
        avatar=row.get("avatar"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_deal(row: Dict[str, Any]) -> Deal:
    """Convert database row to Deal domain model.

    Args:
        row: Database row as dict

    Returns:
        Deal domain model
    """
    return Deal(
        id=DealId(_uuid(row["id"])),
        posted_by=UserId(_uuid(row["posted_by"])),
        store=StoreId(_uuid(row["store_id"])),
        category=CategoryPath(row["category"]),
        title=row["title"],
        description=row["description"],
        original_price=row["original_price"],
        price=row["price"],
        deal_score=row["deal_score"],
        upvoters=frozenset(UserId(_uuid(u)) for u in row.get("upvoters") or ()),
        downvoters=frozenset(UserId(_uuid(u)) for u in row.get("downvoters") or ()),
        status=DealStatus(row["status"]),
        photos=tuple(row.get("photos") or ()),
        cover_photo=row.get("cover_photo"),
        deal_url=row.get("deal_url"),
        tags=tuple(CategoryPath(t) for t in row.get("tags") or ()),
        location=row.get("location"),
        views=row["views"],
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def deal_to_dict(deal: Deal) -> Dict[str, Any]:
    """Convert Deal domain model to database dict.

    Voter sets are stored sorted so rows compare stably.
    """
    return {
        "id": deal.id,
        "posted_by": deal.posted_by,
        "store_id": deal.store,
        "category": deal.category.root,
        "title": deal.title,
        "description": deal.description,
        "original_price": deal.original_price,
        "price": deal.price,
        "deal_score": deal.deal_score,
        "upvoters": sorted(deal.upvoters),
        "downvoters": sorted(deal.downvoters),
        "status": deal.status.value,
        "photos": list(deal.photos),
        "cover_photo": deal.cover_photo,
        "deal_url": deal.deal_url,
        "tags": [t.root for t in deal.tags],
        "location": deal.location,
        "views": deal.views,
        "created_at": deal.created_at,
        "updated_at": deal.updated_at,
    }
