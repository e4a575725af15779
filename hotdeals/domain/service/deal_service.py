"""Deal ledger domain service.

Writes to a single deal (edits, votes, status changes) are serialized per deal id;
writes to different deals proceed in parallel. Reads never take locks.
"""

import asyncio
from collections.abc import AsyncIterator, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import logfire

from hotdeals.config import LedgerSettings
from hotdeals.domain.error import (
    DeadlineExceededError,
    IllegalTransitionError,
    InvalidPriceError,
    NotAuthorizedError,
    NotFoundError,
    UnresolvedReferenceError,
)
from hotdeals.domain.model import Deal
from hotdeals.domain.repository import DealRepository
from hotdeals.domain.value import (
    ActorRole,
    CategoryPath,
    DealCursor,
    DealId,
    DealSortField,
    DealStatus,
    EntityKind,
    SortOrder,
    StoreId,
    UserId,
    VoteDirection,
    as_utc,
    utc_now,
)
from hotdeals.util.ids import new_id
from hotdeals.util.locking import KeyedLocks

from .base import Service
from .category_service import CategoryService, parse_path
from .reference_service import ReferenceService


@dataclass
class DealPage:
    """One page of a deal listing."""

    deals: list[Deal]
    next_cursor: Optional[str] = None


def deal_lock_key(deal_id: DealId) -> tuple[str, DealId]:
    return ("deal", deal_id)


class DealService(Service):
    """Domain service for the deal ledger."""

    def __init__(
        self,
        deal_repository: DealRepository,
        reference_service: ReferenceService,
        category_service: CategoryService,
        locks: KeyedLocks,
        ledger_settings: LedgerSettings,
    ) -> None:
        """Initialize deal service.

        Args:
            deal_repository: Deal repository
            reference_service: Resolves users, stores, categories and tags
            category_service: Category service (tag auto-creation)
            locks: Shared lock registry
            ledger_settings: Ledger configuration
        """
        self.deal_repository = deal_repository
        self.reference_service = reference_service
        self.category_service = category_service
        self.locks = locks
        self.ledger_settings = ledger_settings

    async def post_deal(
        self,
        posted_by: UserId,
        store: StoreId,
        category: str | CategoryPath,
        title: str,
        description: str,
        original_price: float,
        price: float,
        photos: Sequence[str] = (),
        cover_photo: Optional[str] = None,
        tags: Iterable[str | CategoryPath] = (),
        location: Optional[str] = None,
        deal_url: Optional[str] = None,
    ) -> Deal:
        """Post a new deal.

        The deal starts ACTIVE with no votes, no views and a score of 0.

        Args:
            posted_by: Posting user
            store: Store offering the deal
            category: Category path the deal is filed under
            title: Deal title
            description: Deal description
            original_price: Price before discount
            price: Discounted price (may exceed ``original_price``)
            photos: Photo URLs
            cover_photo: Cover photo URL (defaults to the first photo)
            tags: Tag paths
            location: Free-text location
            deal_url: Link to the offer

        Returns:
            Created deal

        Raises:
            InvalidPriceError: If a price is negative
            UnresolvedReferenceError: If the poster, store, category or a tag
                does not resolve
        """
        with logfire.span(
            "deal_service.post_deal",
            posted_by=str(posted_by),
            store=str(store),
            category=str(category),
        ):
            deal, new_tags = await self._build_deal(
                posted_by=posted_by,
                store=store,
                category=category,
                title=title,
                description=description,
                original_price=original_price,
                price=price,
                photos=photos,
                cover_photo=cover_photo,
                tags=tags,
                location=location,
                deal_url=deal_url,
            )
            saved = await self.deal_repository.save(deal)
            await self._create_tags(new_tags)
            logfire.info(
                "Deal posted",
                deal_id=str(saved.id),
                posted_by=str(posted_by),
                category=saved.category.root,
            )
            return saved

    async def import_deal(
        self,
        posted_by: UserId,
        store: StoreId,
        category: str | CategoryPath,
        title: str,
        description: str,
        original_price: float,
        price: float,
        photos: Sequence[str] = (),
        cover_photo: Optional[str] = None,
        tags: Iterable[str | CategoryPath] = (),
        location: Optional[str] = None,
        deal_url: Optional[str] = None,
        deal_score: int = 0,
        views: int = 0,
        status: DealStatus = DealStatus.ACTIVE,
        created_at: Optional[datetime] = None,
    ) -> Deal:
        """Load a pre-existing deal, keeping its score, views and status.

        Used by the bulk loader. References are resolved exactly as in
        :meth:`post_deal`. The stored score stands until the first vote,
        which recomputes it from the voter sets.

        Raises:
            InvalidPriceError: If a price is negative
            UnresolvedReferenceError: If a reference does not resolve
        """
        with logfire.span(
            "deal_service.import_deal", posted_by=str(posted_by), title=title
        ):
            deal, new_tags = await self._build_deal(
                posted_by=posted_by,
                store=store,
                category=category,
                title=title,
                description=description,
                original_price=original_price,
                price=price,
                photos=photos,
                cover_photo=cover_photo,
                tags=tags,
                location=location,
                deal_url=deal_url,
                deal_score=deal_score,
                views=views,
                status=status,
                created_at=created_at,
            )
            saved = await self.deal_repository.save(deal)
            await self._create_tags(new_tags)
            logfire.info("Deal imported", deal_id=str(saved.id), status=saved.status.value)
            return saved

    async def find_existing(
        self, posted_by: UserId, store: StoreId, title: str
    ) -> Optional[Deal]:
        """Find a deal by poster, store and title."""
        return await self.deal_repository.find_by_poster_store_title(
            posted_by, store, title
        )

    async def get_deal(self, deal_id: DealId, include_removed: bool = False) -> Deal:
        """Get a deal by ID.

        Args:
            deal_id: Deal ID
            include_removed: Return REMOVED deals instead of treating them
                as absent

        Raises:
            NotFoundError: If the deal does not exist
        """
        with logfire.span("deal_service.get_deal", deal_id=str(deal_id)):
            deal = await self.deal_repository.find_by_id(deal_id)
            if not deal or (deal.status == DealStatus.REMOVED and not include_removed):
                logfire.warn("Deal not found", deal_id=str(deal_id))
                raise NotFoundError("Deal", str(deal_id))
            return deal

    async def vote(
        self, deal_id: DealId, user_id: UserId, direction: VoteDirection
    ) -> Deal:
        """Record, switch or retract a user's vote on a deal.

        Votes on EXPIRED deals are accepted. Repeating a vote leaves the
        deal unchanged.

        Args:
            deal_id: Deal being voted on
            user_id: Voting user
            direction: UP, DOWN or RETRACT

        Returns:
            The deal after the vote

        Raises:
            UnresolvedReferenceError: If the user does not exist
            NotFoundError: If the deal does not exist or is REMOVED
            LockTimeoutError: If the deal stays locked too long
        """
        with logfire.span(
            "deal_service.vote",
            deal_id=str(deal_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            await self.reference_service.resolve(EntityKind.USER, user_id)

            async with self.locks.hold(deal_lock_key(deal_id)):
                deal = await self.deal_repository.find_by_id(deal_id, for_update=True)
                if not deal or deal.status == DealStatus.REMOVED:
                    logfire.warn("Vote on missing deal", deal_id=str(deal_id))
                    raise NotFoundError("Deal", str(deal_id))

                updated = deal.with_vote(user_id, direction)
                if updated is deal:
                    logfire.info("Vote unchanged", deal_id=str(deal_id))
                    return deal
                saved = await self.deal_repository.save(updated)

            logfire.info(
                "Vote recorded",
                deal_id=str(deal_id),
                user_id=str(user_id),
                direction=direction.value,
                score=saved.deal_score,
            )
            return saved

    async def update_deal(
        self,
        deal_id: DealId,
        editor_id: UserId,
        title: Optional[str] = None,
        description: Optional[str] = None,
        original_price: Optional[float] = None,
        price: Optional[float] = None,
        photos: Optional[Sequence[str]] = None,
        cover_photo: Optional[str] = None,
        tags: Optional[Iterable[str | CategoryPath]] = None,
        location: Optional[str] = None,
        deal_url: Optional[str] = None,
    ) -> Deal:
        """Edit a deal's content. Only the poster may edit.

        Fields left as None keep their value. The poster, store and category
        never change. Changed tags are resolved like at posting time.

        Returns:
            The deal after the edit

        Raises:
            NotFoundError: If the deal does not exist or is REMOVED
            NotAuthorizedError: If ``editor_id`` did not post the deal
            InvalidPriceError: If a resulting price is negative
            UnresolvedReferenceError: If a new tag does not resolve
            LockTimeoutError: If the deal stays locked too long
        """
        with logfire.span(
            "deal_service.update_deal", deal_id=str(deal_id), editor_id=str(editor_id)
        ):
            async with self.locks.hold(deal_lock_key(deal_id)):
                deal = await self.deal_repository.find_by_id(deal_id, for_update=True)
                if not deal or deal.status == DealStatus.REMOVED:
                    logfire.warn("Edit of missing deal", deal_id=str(deal_id))
                    raise NotFoundError("Deal", str(deal_id))
                if deal.posted_by != editor_id:
                    logfire.warn(
                        "Edit by non-owner", deal_id=str(deal_id), editor_id=str(editor_id)
                    )
                    raise NotAuthorizedError("edit another user's deal", ActorRole.USER.value)

                changes: dict = {
                    name: value
                    for name, value in (
                        ("title", title),
                        ("description", description),
                        ("original_price", original_price),
                        ("price", price),
                        ("location", location),
                        ("deal_url", deal_url),
                    )
                    if value is not None
                }
                self._check_prices(
                    changes.get("original_price", deal.original_price),
                    changes.get("price", deal.price),
                )

                new_tags: list[CategoryPath] = []
                if tags is not None:
                    tag_paths = list(dict.fromkeys(parse_path(t) for t in tags))
                    if tuple(tag_paths) != deal.tags:
                        new_tags = await self._missing_tags(tag_paths)
                        changes["tags"] = tuple(tag_paths)

                if photos is not None:
                    changes["photos"] = tuple(photos)
                    if cover_photo is None and deal.cover_photo not in changes["photos"]:
                        changes["cover_photo"] = changes["photos"][0] if photos else None
                if cover_photo is not None:
                    changes["cover_photo"] = cover_photo

                if all(getattr(deal, name) == value for name, value in changes.items()):
                    logfire.info("Deal edit unchanged", deal_id=str(deal_id))
                    return deal

                updated = Deal.model_validate(
                    {**deal.model_dump(), **changes, "updated_at": utc_now()}
                )
                saved = await self.deal_repository.save(updated)
                await self._create_tags(new_tags)

            if saved.price_exceeds_original:
                logfire.warn(
                    "Deal price exceeds original price",
                    deal_id=str(deal_id),
                    price=saved.price,
                    original_price=saved.original_price,
                )
            logfire.info("Deal edited", deal_id=str(deal_id), fields=sorted(changes))
            return saved

    async def record_view(self, deal_id: DealId) -> None:
        """Add one view to a deal.

        Best effort: a failure is logged and never reaches the caller.
        """
        try:
            found = await self.deal_repository.increment_views(deal_id)
        except Exception as e:
            logfire.error(
                "Failed to record view", deal_id=str(deal_id), error=str(e)
            )
            return
        if not found:
            logfire.info("View for unknown deal ignored", deal_id=str(deal_id))

    async def set_status(
        self, deal_id: DealId, new_status: DealStatus, actor_role: ActorRole
    ) -> Deal:
        """Move a deal through its lifecycle.

        ACTIVE may become EXPIRED or REMOVED, EXPIRED may become REMOVED,
        REMOVED is terminal. Moderators may make any legal move; the system
        actor may only expire ACTIVE deals; plain users may do neither.

        Args:
            deal_id: Deal ID
            new_status: Requested status
            actor_role: Capacity of the caller

        Returns:
            The updated deal

        Raises:
            NotFoundError: If the deal does not exist
            IllegalTransitionError: If the move is not allowed from the
                current status (including a move to the same status)
            NotAuthorizedError: If the role may not make this move
            LockTimeoutError: If the deal stays locked too long
        """
        with logfire.span(
            "deal_service.set_status",
            deal_id=str(deal_id),
            new_status=new_status.value,
            actor_role=actor_role.value,
        ):
            async with self.locks.hold(deal_lock_key(deal_id)):
                deal = await self.deal_repository.find_by_id(deal_id, for_update=True)
                if not deal:
                    logfire.warn("Status change on missing deal", deal_id=str(deal_id))
                    raise NotFoundError("Deal", str(deal_id))

                if not deal.can_transition_to(new_status):
                    logfire.warn(
                        "Illegal status transition",
                        deal_id=str(deal_id),
                        current=deal.status.value,
                        requested=new_status.value,
                    )
                    raise IllegalTransitionError(
                        str(deal_id), deal.status.value, new_status.value
                    )
                self._authorize_transition(deal.status, new_status, actor_role)

                updated = deal.model_copy(
                    update={"status": new_status, "updated_at": utc_now()}
                )
                saved = await self.deal_repository.save(updated)

            logfire.info(
                "Deal status changed",
                deal_id=str(deal_id),
                previous=deal.status.value,
                status=new_status.value,
                actor_role=actor_role.value,
            )
            return saved

    async def list_by_category(
        self,
        path: str | CategoryPath,
        status: Optional[DealStatus] = None,
        sort_by: DealSortField = DealSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> DealPage:
        """List deals under a category and all of its descendants.

        Args:
            path: Category path (``/`` lists everything)
            status: Only deals in this status (None for any)
            sort_by: Sort field
            order: Sort direction
            cursor: Token from a previous page's ``next_cursor``
            limit: Page size (clamped to the configured maximum)
            deadline: Seconds the read may take

        Returns:
            The page, with ``next_cursor`` set when more deals follow

        Raises:
            InvalidPathError: If ``path`` is malformed
            NotFoundError: If ``path`` is not the root and does not exist
            InvalidCursorError: If ``cursor`` is malformed or was issued for
                another sort
            DeadlineExceededError: If the read outlives ``deadline``
        """
        path = parse_path(path)
        page_size = self._page_size(limit)

        with logfire.span(
            "deal_service.list_by_category",
            path=path.root,
            status=status.value if status else None,
            sort_by=sort_by.value,
            order=order.value,
            limit=page_size,
        ):
            after = DealCursor.decode(cursor, sort_by, order) if cursor else None
            fetch = self._fetch_category_page(path, status, sort_by, order, after, page_size)
            if deadline is None:
                return await fetch
            try:
                return await asyncio.wait_for(fetch, timeout=deadline)
            except asyncio.TimeoutError:
                logfire.warn(
                    "Deal listing exceeded deadline", path=path.root, deadline=deadline
                )
                raise DeadlineExceededError("list_by_category", deadline) from None

    async def iter_by_category(
        self,
        path: str | CategoryPath,
        status: Optional[DealStatus] = None,
        sort_by: DealSortField = DealSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Deal]:
        """Stream every deal under a category, page by page."""
        cursor: Optional[str] = None
        while True:
            page = await self.list_by_category(
                path, status=status, sort_by=sort_by, order=order,
                cursor=cursor, limit=page_size,
            )
            for deal in page.deals:
                yield deal
            if not page.next_cursor:
                return
            cursor = page.next_cursor

    async def list_by_store(
        self,
        store_id: StoreId,
        status: Optional[DealStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Deal]:
        """List a store's deals, newest first.

        Raises:
            NotFoundError: If the store does not exist
        """
        with logfire.span("deal_service.list_by_store", store_id=str(store_id)):
            try:
                await self.reference_service.resolve(EntityKind.STORE, store_id)
            except UnresolvedReferenceError:
                raise NotFoundError("Store", str(store_id)) from None
            return await self.deal_repository.find_by_store(
                store_id, status=status, limit=self._page_size(limit), offset=max(offset, 0)
            )

    async def count_by_poster(self, posted_by: UserId) -> int:
        """Number of deals a user has posted."""
        return await self.deal_repository.count_by_poster(posted_by)

    async def count_by_store(self, store_id: StoreId) -> int:
        """Number of deals a store offers."""
        return await self.deal_repository.count_by_store(store_id)

    async def expire_stale(self, cutoff: Optional[datetime] = None) -> list[DealId]:
        """Expire ACTIVE deals created before ``cutoff``.

        Runs as the system actor. A deal that changed status concurrently
        is skipped.

        Args:
            cutoff: Creation time bound (defaults to now minus
                ``ledger.expire_after_days``)

        Returns:
            IDs of the deals expired
        """
        if cutoff is None:
            cutoff = utc_now() - timedelta(
                days=self.ledger_settings.expire_after_days
            )
        else:
            cutoff = as_utc(cutoff)
        with logfire.span("deal_service.expire_stale", cutoff=cutoff.isoformat()):
            stale = await self.deal_repository.find_active_created_before(cutoff)
            expired: list[DealId] = []
            for deal in stale:
                try:
                    await self.set_status(deal.id, DealStatus.EXPIRED, ActorRole.SYSTEM)
                except IllegalTransitionError:
                    continue
                expired.append(deal.id)
            logfire.info("Stale deals expired", count=len(expired), scanned=len(stale))
            return expired

    async def _build_deal(
        self,
        posted_by: UserId,
        store: StoreId,
        category: str | CategoryPath,
        original_price: float,
        price: float,
        tags: Iterable[str | CategoryPath],
        photos: Sequence[str],
        cover_photo: Optional[str],
        **fields,
    ) -> tuple[Deal, list[CategoryPath]]:
        """Validate and resolve everything a new deal needs.

        Nothing is written here. Returns the deal and the tags to create
        once it has been saved.
        """
        self._check_prices(original_price, price)

        category_path = parse_path(category)
        tag_paths = list(dict.fromkeys(parse_path(t) for t in tags))

        await self.reference_service.resolve(EntityKind.USER, posted_by)
        await self.reference_service.resolve(EntityKind.STORE, store)
        await self.reference_service.resolve(EntityKind.CATEGORY, category_path)
        missing_tags = await self._missing_tags(tag_paths)

        photos = tuple(photos)
        created_at = fields.pop("created_at", None)
        created_at = as_utc(created_at) if created_at else utc_now()
        deal = Deal(
            id=DealId(new_id()),
            posted_by=posted_by,
            store=store,
            category=category_path,
            original_price=original_price,
            price=price,
            photos=photos,
            cover_photo=cover_photo or (photos[0] if photos else None),
            tags=tuple(tag_paths),
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        if deal.price_exceeds_original:
            logfire.warn(
                "Deal price exceeds original price",
                price=deal.price,
                original_price=deal.original_price,
            )
        return deal, missing_tags

    @staticmethod
    def _check_prices(original_price: float, price: float) -> None:
        if original_price < 0 or price < 0:
            raise InvalidPriceError("Prices must not be negative")

    async def _missing_tags(self, tag_paths: list[CategoryPath]) -> list[CategoryPath]:
        """Tags that do not exist yet but may be auto-created.

        Raises:
            UnresolvedReferenceError: If a tag neither resolves nor can be
                auto-created (auto-creation off, nested path, or the path
                belongs to a non-tag category)
        """
        missing: list[CategoryPath] = []
        for tag in tag_paths:
            if await self.reference_service.find(EntityKind.TAG, tag) is not None:
                continue
            creatable = (
                self.ledger_settings.auto_create_tags
                and tag.parent.is_root
                and await self.category_service.find_by_path(tag) is None
            )
            if not creatable:
                logfire.warn("Unresolved tag", tag=tag.root)
                raise UnresolvedReferenceError(EntityKind.TAG.value, tag.root)
            missing.append(tag)
        return missing

    async def _create_tags(self, tag_paths: list[CategoryPath]) -> None:
        # Runs after the deal is saved; on PostgreSQL both share the request
        # transaction
        for tag in tag_paths:
            if await self.category_service.ensure_tag(tag) is None:
                raise UnresolvedReferenceError(EntityKind.TAG.value, tag.root)

    async def _fetch_category_page(
        self,
        path: CategoryPath,
        status: Optional[DealStatus],
        sort_by: DealSortField,
        order: SortOrder,
        after: Optional[DealCursor],
        page_size: int,
    ) -> DealPage:
        if not path.is_root:
            if await self.reference_service.find(EntityKind.CATEGORY, path) is None:
                logfire.warn("Listing unknown category", path=path.root)
                raise NotFoundError("Category", path.root)

        deals = await self.deal_repository.find_by_category(
            path, status=status, sort_by=sort_by, order=order,
            after=after, limit=page_size + 1,
        )
        next_cursor = None
        if len(deals) > page_size:
            deals = deals[:page_size]
            last = deals[-1]
            next_cursor = DealCursor(
                sort_by=sort_by, order=order, key=last.sort_key(sort_by), deal_id=last.id
            ).encode()
        logfire.info("Deals listed", path=path.root, count=len(deals))
        return DealPage(deals=deals, next_cursor=next_cursor)

    def _page_size(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.ledger_settings.default_page_size
        return max(1, min(limit, self.ledger_settings.max_page_size))

    @staticmethod
    def _authorize_transition(
        current: DealStatus, requested: DealStatus, role: ActorRole
    ) -> None:
        if role == ActorRole.MODERATOR:
            return
        if (
            role == ActorRole.SYSTEM
            and current == DealStatus.ACTIVE
            and requested == DealStatus.EXPIRED
        ):
            return
        logfire.warn(
            "Status change not authorized",
            role=role.value,
            current=current.value,
            requested=requested.value,
        )
        raise NotAuthorizedError(f"move a deal from {current.value} to {requested.value}", role.value)
