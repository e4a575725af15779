"""Resolution of cross-entity references."""

from typing import Union
from uuid import UUID

import logfire

from hotdeals.domain.error import UnresolvedReferenceError
from hotdeals.domain.model import Category, Deal, Store, User
from hotdeals.domain.repository import (
    CategoryRepository,
    DealRepository,
    StoreRepository,
    UserRepository,
)
from hotdeals.domain.value import (
    CategoryPath,
    DealId,
    DealStatus,
    EntityKind,
    StoreId,
    UserId,
)

from .base import Service
from .category_service import parse_path

Reference = Union[UUID, CategoryPath, str]
Entity = Union[User, Store, Category, Deal]


class ReferenceService(Service):
    """Turns references into live entities.

    Users, stores and deals are referenced by id; categories and tags by
    path. A tag reference only resolves to a category flagged as a tag, and
    a removed deal does not resolve.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        store_repository: StoreRepository,
        category_repository: CategoryRepository,
        deal_repository: DealRepository,
    ) -> None:
        """Initialize reference service.

        Args:
            user_repository: User repository
            store_repository: Store repository
            category_repository: Category repository
            deal_repository: Deal repository
        """
        self.user_repository = user_repository
        self.store_repository = store_repository
        self.category_repository = category_repository
        self.deal_repository = deal_repository

    async def find(self, kind: EntityKind, ref: Reference) -> Entity | None:
        """Look up the entity behind a reference.

        Args:
            kind: Kind of entity referenced
            ref: Entity id, or path for categories and tags

        Returns:
            The entity, or None if it does not exist (or is not of ``kind``)
        """
        if kind in (EntityKind.CATEGORY, EntityKind.TAG):
            path = parse_path(ref) if isinstance(ref, (str, CategoryPath)) else None
            if path is None or path.is_root:
                return None
            category = await self.category_repository.find_by_path(path)
            if category and kind == EntityKind.TAG and not category.is_tag:
                return None
            return category

        if not isinstance(ref, UUID):
            try:
                ref = UUID(str(ref))
            except ValueError:
                return None

        if kind == EntityKind.USER:
            return await self.user_repository.find_by_id(UserId(ref))
        if kind == EntityKind.STORE:
            return await self.store_repository.find_by_id(StoreId(ref))

        deal = await self.deal_repository.find_by_id(DealId(ref))
        if deal and deal.status == DealStatus.REMOVED:
            return None
        return deal

    async def resolve(self, kind: EntityKind, ref: Reference) -> Entity:
        """Like :meth:`find` but failing when nothing is found.

        Raises:
            UnresolvedReferenceError: If the reference does not resolve
        """
        entity = await self.find(kind, ref)
        if entity is None:
            logfire.warn("Unresolved reference", kind=kind.value, ref=str(ref))
            raise UnresolvedReferenceError(kind.value, str(ref))
        return entity
