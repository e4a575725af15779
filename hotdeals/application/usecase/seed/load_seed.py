"""Bulk seed loader use case.

Loads a bundle of categories, stores, users and deals in dependency order.
Re-running the same bundle creates nothing new: existing category paths,
user uids and store names are skipped, and a deal is skipped when its
poster already has a deal with the same store and title.
"""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.error import UnresolvedReferenceError
from hotdeals.domain.service import (
    CategoryService,
    DealService,
    StoreService,
    UserService,
)
from hotdeals.domain.value import CategoryIcon, DealStatus, EntityKind

from ..base import BaseUseCase
from ..category.common import CategoryIconItem


class SeedCategory(BaseModel):
    """Seed category or tag."""

    path: str
    parent: str = "/"
    names: dict[str, str]
    icon: CategoryIconItem | None = None
    is_tag: bool = False


class SeedStore(BaseModel):
    """Seed store (deals refer to it by name)."""

    name: str
    logo: str | None = None


class SeedUser(BaseModel):
    """Seed user (deals refer to it by uid)."""

    uid: str
    nickname: str
    email: str | None = None
    avatar: str | None = None


class SeedDeal(BaseModel):
    """Seed deal."""

    posted_by: str  # user uid
    store: str  # store name
    category: str
    title: str
    description: str
    original_price: float
    price: float
    deal_score: int = 0
    views: int = Field(default=0, ge=0)
    status: DealStatus = DealStatus.ACTIVE
    photos: list[str] = Field(default_factory=list)
    cover_photo: str | None = None
    tags: list[str] = Field(default_factory=list)
    location: str | None = None
    deal_url: str | None = None
    created_at: datetime | None = None


class SeedBundle(BaseModel):
    """Bulk loader input document."""

    categories: list[SeedCategory] = Field(default_factory=list)
    stores: list[SeedStore] = Field(default_factory=list)
    users: list[SeedUser] = Field(default_factory=list)
    deals: list[SeedDeal] = Field(default_factory=list)


class SeedCounts(BaseModel):
    """Created and skipped records of one kind."""

    created: int = 0
    skipped: int = 0


class SeedReport(BaseModel):
    """Bulk loader result."""

    categories: SeedCounts = Field(default_factory=SeedCounts)
    stores: SeedCounts = Field(default_factory=SeedCounts)
    users: SeedCounts = Field(default_factory=SeedCounts)
    deals: SeedCounts = Field(default_factory=SeedCounts)


class LoadSeedUseCase(BaseUseCase[SeedBundle, SeedReport]):
    """Use case for loading a seed bundle."""

    def __init__(
        self,
        category_service: CategoryService,
        store_service: StoreService,
        user_service: UserService,
        deal_service: DealService,
    ) -> None:
        """Initialize load seed use case.

        Args:
            category_service: Category domain service
            store_service: Store domain service
            user_service: User domain service
            deal_service: Deal domain service
        """
        self.category_service = category_service
        self.store_service = store_service
        self.user_service = user_service
        self.deal_service = deal_service

    async def execute(self, bundle: SeedBundle) -> SeedReport:
        """Execute the load.

        Steps:
        1. Categories, parents before children
        2. Stores
        3. Users
        4. Deals (poster by uid, store by name)

        Args:
            bundle: Seed bundle

        Returns:
            Created/skipped counts per kind

        Raises:
            UnresolvedReferenceError: If a deal names an unknown user, store,
                category or tag
            DomainError: If a record is invalid
        """
        report = SeedReport()
        with logfire.span(
            "load_seed.execute",
            categories=len(bundle.categories),
            stores=len(bundle.stores),
            users=len(bundle.users),
            deals=len(bundle.deals),
        ):
            await self._load_categories(bundle.categories, report.categories)
            await self._load_stores(bundle.stores, report.stores)
            await self._load_users(bundle.users, report.users)
            await self._load_deals(bundle.deals, report.deals)
            logfire.info("Seed loaded", **report.model_dump())
        return report

    async def _load_categories(
        self, categories: list[SeedCategory], counts: SeedCounts
    ) -> None:
        # Shallow paths first so parents exist before their children
        ordered = sorted(
            categories, key=lambda c: (c.path.rstrip("/").count("/"), c.path)
        )
        for item in ordered:
            if await self.category_service.find_by_path(item.path):
                counts.skipped += 1
                continue
            await self.category_service.create_category(
                path=item.path,
                parent=item.parent,
                names=item.names,
                icon=CategoryIcon(**item.icon.model_dump()) if item.icon else None,
                is_tag=item.is_tag,
            )
            counts.created += 1

    async def _load_stores(self, stores: list[SeedStore], counts: SeedCounts) -> None:
        for item in stores:
            if await self.store_service.find_by_name(item.name):
                counts.skipped += 1
                continue
            await self.store_service.create_store(item.name, item.logo)
            counts.created += 1

    async def _load_users(self, users: list[SeedUser], counts: SeedCounts) -> None:
        for item in users:
            if await self.user_service.find_by_uid(item.uid):
                counts.skipped += 1
                continue
            await self.user_service.create_user(
                uid=item.uid,
                nickname=item.nickname,
                email=item.email,
                avatar=item.avatar,
            )
            counts.created += 1

    async def _load_deals(self, deals: list[SeedDeal], counts: SeedCounts) -> None:
        for item in deals:
            user = await self.user_service.find_by_uid(item.posted_by)
            if not user:
                raise UnresolvedReferenceError(EntityKind.USER.value, item.posted_by)
            store = await self.store_service.find_by_name(item.store)
            if not store:
                raise UnresolvedReferenceError(EntityKind.STORE.value, item.store)

            if await self.deal_service.find_existing(user.id, store.id, item.title):
                counts.skipped += 1
                continue
            await self.deal_service.import_deal(
                posted_by=user.id,
                store=store.id,
                category=item.category,
                title=item.title,
                description=item.description,
                original_price=item.original_price,
                price=item.price,
                photos=item.photos,
                cover_photo=item.cover_photo,
                tags=item.tags,
                location=item.location,
                deal_url=item.deal_url,
                deal_score=item.deal_score,
                views=item.views,
                status=item.status,
                created_at=item.created_at,
            )
            counts.created += 1
