"""Unit tests for DealService."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from hotdeals.config import LedgerSettings
from hotdeals.domain.error import (
    DeadlineExceededError,
    IllegalTransitionError,
    InvalidCursorError,
    InvalidPriceError,
    NotAuthorizedError,
    NotFoundError,
    UnresolvedReferenceError,
)
from hotdeals.domain.repository import DealRepository
from hotdeals.domain.service import (
    CategoryService,
    DealService,
    ReferenceService,
    StoreService,
    UserService,
)
from hotdeals.domain.value import (
    ActorRole,
    CategoryPath,
    DealId,
    DealSortField,
    DealStatus,
    SortOrder,
    UserId,
    VoteDirection,
)
from hotdeals.persistence.repository.inmemory import (
    InMemoryCategoryRepository,
    InMemoryDealRepository,
    InMemoryStoreRepository,
    InMemoryUserRepository,
)
from hotdeals.util.locking import KeyedLocks
from tests.conftest import Catalog, make_catalog
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def post(service: DealService, catalog: Catalog, **overrides):
    fields = dict(
        posted_by=catalog.poster.id,
        store=catalog.store.id,
        category="/computers/video-cards",
        title="RTX 4090",
        description="Lowest price ever seen",
        original_price=1999.0,
        price=1599.0,
    )
    fields.update(overrides)
    return await service.post_deal(**fields)


class SlowDealRepository(InMemoryDealRepository):
    """Deal repository whose listings take a while."""

    async def find_by_category(self, *args, **kwargs):
        await asyncio.sleep(0.5)
        return await super().find_by_category(*args, **kwargs)


class BrokenViewsRepository(InMemoryDealRepository):
    """Deal repository that cannot count views."""

    async def increment_views(self, deal_id):
        raise RuntimeError("views store unavailable")


class FailingSaveRepository(InMemoryDealRepository):
    """Deal repository that rejects every write."""

    async def save(self, deal):
        raise RuntimeError("deals table unavailable")


class StandaloneLedger:
    """Deal ledger wired by hand for tests needing custom settings or repositories."""

    def __init__(
        self,
        settings: LedgerSettings | None = None,
        deal_repository: DealRepository | None = None,
    ) -> None:
        settings = settings or LedgerSettings()
        locks = KeyedLocks(default_timeout=settings.lock_timeout_seconds)
        categories = InMemoryCategoryRepository()
        users = InMemoryUserRepository()
        deals = deal_repository or InMemoryDealRepository()
        self.category_service = CategoryService(categories, locks, settings)
        self.user_service = UserService(users, locks)
        stores = InMemoryStoreRepository()
        self.store_service = StoreService(stores, locks)
        references = ReferenceService(users, stores, categories, deals)
        self.deal_service = DealService(
            deals, references, self.category_service, locks, settings
        )

    async def get(self, service_type):
        # Same lookup interface as the request container
        services = {
            CategoryService: self.category_service,
            StoreService: self.store_service,
            UserService: self.user_service,
            DealService: self.deal_service,
        }
        return services[service_type]


class TestPostDeal:
    """Tests for post_deal."""

    @pytest.mark.asyncio
    async def test_post_deal_starts_active_and_unvoted(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        deal = await post(
            service,
            catalog,
            photos=["https://example.com/1.jpg", "https://example.com/2.jpg"],
            tags=["/sale"],
        )

        assert deal.status == DealStatus.ACTIVE
        assert deal.deal_score == 0
        assert deal.views == 0
        assert deal.updated_at == deal.created_at
        assert not deal.upvoters and not deal.downvoters
        assert deal.cover_photo == "https://example.com/1.jpg"
        assert deal.tags == (CategoryPath("/sale"),)
        assert await service.get_deal(deal.id) == deal

    @pytest.mark.asyncio
    async def test_explicit_cover_photo_kept(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        deal = await post(
            service, catalog, photos=["a.jpg", "b.jpg"], cover_photo="b.jpg"
        )

        assert deal.cover_photo == "b.jpg"

    @pytest.mark.asyncio
    async def test_price_above_original_allowed(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        deal = await post(service, catalog, original_price=10.0, price=12.0)

        assert deal.price_exceeds_original

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        with pytest.raises(InvalidPriceError):
            await post(service, catalog, price=-1.0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value,kind",
        [
            ("posted_by", UserId(uuid4()), "user"),
            ("store", uuid4(), "store"),
            ("category", "/nowhere", "category"),
            ("tags", ["/no-such-tag"], "tag"),
            ("tags", ["/computers"], "tag"),
        ],
    )
    async def test_unresolved_references_rejected(self, unit_env, field, value, kind):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            await post(service, catalog, **{field: value})

        assert exc_info.value.kind == kind
        assert await service.count_by_poster(catalog.poster.id) == 0

    @pytest.mark.asyncio
    async def test_unknown_tag_auto_created_when_enabled(self):
        ledger = StandaloneLedger(LedgerSettings(auto_create_tags=True))
        catalog = await make_catalog(ledger)

        deal = await post(ledger.deal_service, catalog, tags=["/black-friday"])

        tag = await ledger.category_service.find_by_path("/black-friday")
        assert tag is not None and tag.is_tag
        assert deal.tags == (CategoryPath("/black-friday"),)

    @pytest.mark.asyncio
    async def test_no_tag_created_when_other_reference_fails(self):
        ledger = StandaloneLedger(LedgerSettings(auto_create_tags=True))
        catalog = await make_catalog(ledger)

        with pytest.raises(UnresolvedReferenceError):
            await post(
                ledger.deal_service, catalog, category="/nowhere", tags=["/black-friday"]
            )

        assert await ledger.category_service.find_by_path("/black-friday") is None

    @pytest.mark.asyncio
    async def test_no_tag_created_when_deal_save_fails(self):
        ledger = StandaloneLedger(
            LedgerSettings(auto_create_tags=True), deal_repository=FailingSaveRepository()
        )
        catalog = await make_catalog(ledger)

        with pytest.raises(RuntimeError):
            await post(ledger.deal_service, catalog, tags=["/black-friday"])

        assert await ledger.category_service.find_by_path("/black-friday") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tag", ["/deals/black-friday", "/computers"])
    async def test_uncreatable_tag_rejected_before_saving(self, tag):
        # Nested paths are never auto-created; /computers is not a tag
        ledger = StandaloneLedger(LedgerSettings(auto_create_tags=True))
        catalog = await make_catalog(ledger)

        with pytest.raises(UnresolvedReferenceError):
            await post(ledger.deal_service, catalog, tags=[tag])

        assert await ledger.deal_service.count_by_poster(catalog.poster.id) == 0

    @pytest.mark.asyncio
    async def test_duplicate_tags_collapsed(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        deal = await post(service, catalog, tags=["/sale", "/sale"])

        assert deal.tags == (CategoryPath("/sale"),)


class TestImportDeal:
    """Tests for import_deal."""

    @pytest.mark.asyncio
    async def test_import_keeps_seed_values(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        deal = await service.import_deal(
            posted_by=catalog.poster.id,
            store=catalog.store.id,
            category="/computers",
            title="Old deal",
            description="From the archive",
            original_price=100.0,
            price=80.0,
            deal_score=12,
            views=340,
            status=DealStatus.EXPIRED,
            created_at=created,
        )

        assert deal.deal_score == 12
        assert deal.views == 340
        assert deal.status == DealStatus.EXPIRED
        assert deal.created_at == created
        found = await service.find_existing(catalog.poster.id, catalog.store.id, "Old deal")
        assert found == deal


class TestGetDeal:
    """Tests for get_deal and record_view."""

    @pytest.mark.asyncio
    async def test_missing_deal_raises(self, unit_env):
        service = await unit_env.get(DealService)

        with pytest.raises(NotFoundError):
            await service.get_deal(DealId(uuid4()))

    @pytest.mark.asyncio
    async def test_removed_deal_hidden_unless_requested(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.set_status(deal.id, DealStatus.REMOVED, ActorRole.MODERATOR)

        with pytest.raises(NotFoundError):
            await service.get_deal(deal.id)
        removed = await service.get_deal(deal.id, include_removed=True)
        assert removed.status == DealStatus.REMOVED

    @pytest.mark.asyncio
    async def test_record_view_increments(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        await asyncio.gather(*(service.record_view(deal.id) for _ in range(10)))

        assert (await service.get_deal(deal.id)).views == 10

    @pytest.mark.asyncio
    async def test_record_view_for_unknown_deal_is_silent(self, unit_env):
        service = await unit_env.get(DealService)

        await service.record_view(DealId(uuid4()))

    @pytest.mark.asyncio
    async def test_record_view_failure_is_swallowed(self):
        ledger = StandaloneLedger(deal_repository=BrokenViewsRepository())
        catalog = await make_catalog(ledger)
        deal = await post(ledger.deal_service, catalog)

        await ledger.deal_service.record_view(deal.id)

        assert (await ledger.deal_service.get_deal(deal.id)).views == 0

    @pytest.mark.asyncio
    async def test_votes_do_not_lose_views(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.record_view(deal.id)

        await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)

        assert (await service.get_deal(deal.id)).views == 1


class TestVote:
    """Tests for vote."""

    @pytest.mark.asyncio
    async def test_upvote_then_downvote(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        up = await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)
        down = await service.vote(deal.id, catalog.voter.id, VoteDirection.DOWN)

        assert up.deal_score == 1
        assert down.deal_score == -1
        assert catalog.voter.id in down.downvoters
        assert catalog.voter.id not in down.upvoters

    @pytest.mark.asyncio
    async def test_repeat_vote_is_idempotent(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        first = await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)
        second = await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)

        assert second == first
        assert second.deal_score == 1

    @pytest.mark.asyncio
    async def test_retract_without_vote_is_noop(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        result = await service.vote(deal.id, catalog.voter.id, VoteDirection.RETRACT)

        assert result == deal

    @pytest.mark.asyncio
    async def test_concurrent_votes_all_counted(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        user_service = await unit_env.get(UserService)
        deal = await post(service, catalog)
        voters = [
            await user_service.create_user(uid=f"voter-{i}", nickname=f"Voter {i}")
            for i in range(20)
        ]

        await asyncio.gather(
            *(service.vote(deal.id, v.id, VoteDirection.UP) for v in voters)
        )

        final = await service.get_deal(deal.id)
        assert final.deal_score == 20
        assert len(final.upvoters) == 20

    @pytest.mark.asyncio
    async def test_vote_by_unknown_user_rejected(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(UnresolvedReferenceError):
            await service.vote(deal.id, UserId(uuid4()), VoteDirection.UP)

    @pytest.mark.asyncio
    async def test_vote_on_missing_or_removed_deal(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.set_status(deal.id, DealStatus.REMOVED, ActorRole.MODERATOR)

        with pytest.raises(NotFoundError):
            await service.vote(DealId(uuid4()), catalog.voter.id, VoteDirection.UP)
        with pytest.raises(NotFoundError):
            await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)

    @pytest.mark.asyncio
    async def test_vote_on_expired_deal_allowed(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.set_status(deal.id, DealStatus.EXPIRED, ActorRole.SYSTEM)

        voted = await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)

        assert voted.deal_score == 1
        assert voted.status == DealStatus.EXPIRED


class TestUpdateDeal:
    """Tests for update_deal."""

    @pytest.mark.asyncio
    async def test_poster_edits_content(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.record_view(deal.id)

        updated = await service.update_deal(
            deal.id,
            catalog.poster.id,
            title="RTX 4090 Founders Edition",
            price=1499.0,
            location="Aisle 7",
        )

        assert updated.title == "RTX 4090 Founders Edition"
        assert updated.price == 1499.0
        assert updated.location == "Aisle 7"
        assert updated.description == deal.description
        assert updated.posted_by == deal.posted_by
        assert updated.store == deal.store
        assert updated.category == deal.category
        assert updated.views == 1
        assert updated.updated_at >= deal.created_at
        assert await service.get_deal(deal.id) == updated

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(NotAuthorizedError):
            await service.update_deal(deal.id, catalog.voter.id, title="Hijacked")

        assert (await service.get_deal(deal.id)).title == deal.title

    @pytest.mark.asyncio
    async def test_removed_or_missing_deal_not_editable(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        await service.set_status(deal.id, DealStatus.REMOVED, ActorRole.MODERATOR)

        with pytest.raises(NotFoundError):
            await service.update_deal(deal.id, catalog.poster.id, title="Back")
        with pytest.raises(NotFoundError):
            await service.update_deal(DealId(uuid4()), catalog.poster.id, title="Ghost")

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(InvalidPriceError):
            await service.update_deal(deal.id, catalog.poster.id, original_price=-5.0)

    @pytest.mark.asyncio
    async def test_changed_tags_are_resolved(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(UnresolvedReferenceError):
            await service.update_deal(deal.id, catalog.poster.id, tags=["/nope"])

        updated = await service.update_deal(deal.id, catalog.poster.id, tags=["/sale"])
        assert updated.tags == (CategoryPath("/sale"),)

    @pytest.mark.asyncio
    async def test_new_tag_auto_created_after_edit(self):
        ledger = StandaloneLedger(LedgerSettings(auto_create_tags=True))
        catalog = await make_catalog(ledger)
        deal = await post(ledger.deal_service, catalog)

        updated = await ledger.deal_service.update_deal(
            deal.id, catalog.poster.id, tags=["/cyber-monday"]
        )

        assert updated.tags == (CategoryPath("/cyber-monday"),)
        tag = await ledger.category_service.find_by_path("/cyber-monday")
        assert tag is not None and tag.is_tag

    @pytest.mark.asyncio
    async def test_new_photos_move_cover(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog, photos=["a.jpg"])

        updated = await service.update_deal(
            deal.id, catalog.poster.id, photos=["b.jpg", "c.jpg"]
        )

        assert updated.photos == ("b.jpg", "c.jpg")
        assert updated.cover_photo == "b.jpg"

    @pytest.mark.asyncio
    async def test_unchanged_edit_is_noop(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        same = await service.update_deal(deal.id, catalog.poster.id, title=deal.title)

        assert same == deal


class TestTimestamps:
    """Stored times are UTC whatever offset they arrive with."""

    @pytest.mark.asyncio
    async def test_offset_timestamps_normalized(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        plus_two = timezone(timedelta(hours=2))

        deal = await service.import_deal(
            posted_by=catalog.poster.id,
            store=catalog.store.id,
            category="/computers",
            title="Imported",
            description="From another zone",
            original_price=10.0,
            price=5.0,
            created_at=datetime(2021, 3, 1, 12, 0, tzinfo=plus_two),
        )

        assert deal.created_at == datetime(2021, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert deal.created_at.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_naive_timestamps_read_as_utc(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)

        deal = await service.import_deal(
            posted_by=catalog.poster.id,
            store=catalog.store.id,
            category="/computers",
            title="Imported",
            description="No offset given",
            original_price=10.0,
            price=5.0,
            created_at=datetime(2021, 3, 1, 10, 0),
        )

        assert deal.created_at == datetime(2021, 3, 1, 10, 0, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_imported_and_posted_deals_list_and_expire(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        imported = await service.import_deal(
            posted_by=catalog.poster.id,
            store=catalog.store.id,
            category="/computers",
            title="Imported",
            description="Old deal",
            original_price=10.0,
            price=5.0,
            created_at=datetime.fromisoformat("2021-03-01T10:00:00+00:00"),
        )
        posted = await post(service, catalog)

        page = await service.list_by_category(
            "/computers", sort_by=DealSortField.CREATED_AT
        )
        expired = await service.expire_stale()

        assert [d.id for d in page.deals] == [posted.id, imported.id]
        assert expired == [imported.id]

    @pytest.mark.asyncio
    async def test_naive_cutoff_read_as_utc(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        expired = await service.expire_stale(cutoff=datetime(2999, 1, 1))

        assert expired == [deal.id]

    @pytest.mark.asyncio
    async def test_writes_stamp_utc(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        voted = await service.vote(deal.id, catalog.voter.id, VoteDirection.UP)

        assert deal.created_at.utcoffset() == timedelta(0)
        assert voted.updated_at.utcoffset() == timedelta(0)


class TestSetStatus:
    """Tests for lifecycle transitions and roles."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,role",
        [
            ([DealStatus.EXPIRED], ActorRole.MODERATOR),
            ([DealStatus.REMOVED], ActorRole.MODERATOR),
            ([DealStatus.EXPIRED, DealStatus.REMOVED], ActorRole.MODERATOR),
            ([DealStatus.EXPIRED], ActorRole.SYSTEM),
        ],
    )
    async def test_allowed_transitions(self, unit_env, path, role):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        for status in path:
            deal = await service.set_status(deal.id, status, role)

        assert deal.status == path[-1]
        assert deal.updated_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "start,target",
        [
            ([], DealStatus.ACTIVE),
            ([DealStatus.EXPIRED], DealStatus.ACTIVE),
            ([DealStatus.EXPIRED], DealStatus.EXPIRED),
            ([DealStatus.REMOVED], DealStatus.ACTIVE),
            ([DealStatus.REMOVED], DealStatus.EXPIRED),
        ],
    )
    async def test_illegal_transitions(self, unit_env, start, target):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)
        for status in start:
            await service.set_status(deal.id, status, ActorRole.MODERATOR)

        with pytest.raises(IllegalTransitionError):
            await service.set_status(deal.id, target, ActorRole.MODERATOR)

    @pytest.mark.asyncio
    async def test_user_role_cannot_change_status(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(NotAuthorizedError):
            await service.set_status(deal.id, DealStatus.EXPIRED, ActorRole.USER)

        assert (await service.get_deal(deal.id)).status == DealStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_system_role_cannot_remove(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(NotAuthorizedError):
            await service.set_status(deal.id, DealStatus.REMOVED, ActorRole.SYSTEM)

    @pytest.mark.asyncio
    async def test_illegal_move_reported_before_role(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        with pytest.raises(IllegalTransitionError):
            await service.set_status(deal.id, DealStatus.ACTIVE, ActorRole.USER)

    @pytest.mark.asyncio
    async def test_missing_deal(self, unit_env):
        service = await unit_env.get(DealService)

        with pytest.raises(NotFoundError):
            await service.set_status(DealId(uuid4()), DealStatus.EXPIRED, ActorRole.SYSTEM)

    @pytest.mark.asyncio
    async def test_concurrent_expire_and_remove(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        results = await asyncio.gather(
            service.set_status(deal.id, DealStatus.EXPIRED, ActorRole.MODERATOR),
            service.set_status(deal.id, DealStatus.REMOVED, ActorRole.MODERATOR),
            return_exceptions=True,
        )

        final = await service.get_deal(deal.id, include_removed=True)
        assert final.status == DealStatus.REMOVED
        errors = [r for r in results if isinstance(r, Exception)]
        assert all(isinstance(e, IllegalTransitionError) for e in errors)


class TestExpireStale:
    """Tests for expire_stale."""

    @pytest.mark.asyncio
    async def test_expires_only_old_active_deals(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        old = await service.import_deal(
            posted_by=catalog.poster.id,
            store=catalog.store.id,
            category="/computers",
            title="Old",
            description="Old deal",
            original_price=10.0,
            price=5.0,
            created_at=datetime.now(timezone.utc) - timedelta(days=60),
        )
        fresh = await post(service, catalog, title="Fresh")

        expired = await service.expire_stale()

        assert expired == [old.id]
        assert (await service.get_deal(old.id)).status == DealStatus.EXPIRED
        assert (await service.get_deal(fresh.id)).status == DealStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_explicit_cutoff(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        deal = await post(service, catalog)

        expired = await service.expire_stale(
            cutoff=datetime.now(timezone.utc) + timedelta(seconds=1)
        )

        assert expired == [deal.id]


class TestListByCategory:
    """Tests for category listings and pagination."""

    @pytest.mark.asyncio
    async def test_includes_descendants_only(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        parent_deal = await post(service, catalog, category="/computers", title="PC")
        child_deal = await post(service, catalog, title="GPU")
        await post(service, catalog, category="/electronics", title="TV")

        page = await service.list_by_category("/computers")

        assert {d.id for d in page.deals} == {parent_deal.id, child_deal.id}
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_root_lists_everything(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        await post(service, catalog, category="/computers")
        await post(service, catalog, category="/electronics")

        page = await service.list_by_category("/")

        assert len(page.deals) == 2

    @pytest.mark.asyncio
    async def test_unknown_category_raises(self, unit_env):
        service = await unit_env.get(DealService)

        with pytest.raises(NotFoundError):
            await service.list_by_category("/nowhere")

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        active = await post(service, catalog, title="Active")
        expired = await post(service, catalog, title="Expired")
        await service.set_status(expired.id, DealStatus.EXPIRED, ActorRole.SYSTEM)

        active_page = await service.list_by_category(
            "/computers", status=DealStatus.ACTIVE
        )
        expired_page = await service.list_by_category(
            "/computers", status=DealStatus.EXPIRED
        )
        every_page = await service.list_by_category("/computers", status=None)

        assert [d.id for d in active_page.deals] == [active.id]
        assert [d.id for d in expired_page.deals] == [expired.id]
        assert len(every_page.deals) == 2

    @pytest.mark.asyncio
    async def test_newest_first_by_default(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        first = await post(service, catalog, title="First")
        second = await post(service, catalog, title="Second")

        page = await service.list_by_category("/computers")

        assert [d.id for d in page.deals] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_sort_by_price_ascending(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        for price in (30.0, 10.0, 20.0):
            await post(service, catalog, title=f"at {price}", price=price)

        page = await service.list_by_category(
            "/computers", sort_by=DealSortField.PRICE, order=SortOrder.ASC
        )

        assert [d.price for d in page.deals] == [10.0, 20.0, 30.0]

    @pytest.mark.asyncio
    async def test_cursor_pages_cover_every_deal_once(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        posted = {(await post(service, catalog, title=f"Deal {i}")).id for i in range(7)}

        seen = []
        cursor = None
        pages = 0
        while True:
            page = await service.list_by_category(
                "/computers",
                sort_by=DealSortField.SCORE,
                order=SortOrder.DESC,
                cursor=cursor,
                limit=3,
            )
            pages += 1
            seen.extend(d.id for d in page.deals)
            if not page.next_cursor:
                break
            cursor = page.next_cursor

        assert pages == 3
        assert len(seen) == len(set(seen))
        assert set(seen) == posted

    @pytest.mark.asyncio
    async def test_exact_page_has_no_next_cursor(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        for i in range(3):
            await post(service, catalog, title=f"Deal {i}")

        page = await service.list_by_category("/computers", limit=3)

        assert len(page.deals) == 3
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_page_continues_after_cursor_when_scores_change(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        low = await post(service, catalog, title="Low")
        high = await post(service, catalog, title="High")
        await service.vote(high.id, catalog.voter.id, VoteDirection.UP)

        first = await service.list_by_category(
            "/computers", sort_by=DealSortField.SCORE, limit=1
        )
        assert [d.id for d in first.deals] == [high.id]

        # The low deal overtakes the already-seen one
        await service.vote(low.id, catalog.voter.id, VoteDirection.UP)
        await service.vote(low.id, catalog.poster.id, VoteDirection.UP)

        second = await service.list_by_category(
            "/computers", sort_by=DealSortField.SCORE, cursor=first.next_cursor, limit=1
        )
        assert second.deals == []

    @pytest.mark.asyncio
    async def test_cursor_for_other_sort_rejected(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        for i in range(2):
            await post(service, catalog, title=f"Deal {i}")
        page = await service.list_by_category("/computers", limit=1)

        with pytest.raises(InvalidCursorError):
            await service.list_by_category(
                "/computers", sort_by=DealSortField.PRICE, cursor=page.next_cursor
            )

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self):
        ledger = StandaloneLedger(LedgerSettings(default_page_size=2, max_page_size=3))
        catalog = await make_catalog(ledger)
        for i in range(5):
            await post(ledger.deal_service, catalog, title=f"Deal {i}")

        default = await ledger.deal_service.list_by_category("/computers")
        huge = await ledger.deal_service.list_by_category("/computers", limit=1000)
        tiny = await ledger.deal_service.list_by_category("/computers", limit=0)

        assert len(default.deals) == 2
        assert len(huge.deals) == 3
        assert len(tiny.deals) == 1

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self):
        ledger = StandaloneLedger(deal_repository=SlowDealRepository())
        await make_catalog(ledger)

        with pytest.raises(DeadlineExceededError):
            await ledger.deal_service.list_by_category("/computers", deadline=0.01)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("deadline", [None, 5.0])
    async def test_caller_cancellation_propagates(self, deadline):
        ledger = StandaloneLedger(deal_repository=SlowDealRepository())
        catalog = await make_catalog(ledger)
        await post(ledger.deal_service, catalog)

        task = asyncio.create_task(
            ledger.deal_service.list_by_category("/computers", deadline=deadline)
        )
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_iter_by_category_streams_all_pages(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        posted = [(await post(service, catalog, title=f"Deal {i}")).id for i in range(5)]

        streamed = [d.id async for d in service.iter_by_category("/computers", page_size=2)]

        assert streamed == list(reversed(posted))


class TestStoreListings:
    """Tests for store listings and counts."""

    @pytest.mark.asyncio
    async def test_list_and_count_by_store(self, unit_env):
        catalog = await make_catalog(unit_env)
        service = await unit_env.get(DealService)
        await post(service, catalog, title="One")
        await post(service, catalog, title="Two")

        deals = await service.list_by_store(catalog.store.id)

        assert [d.title for d in deals] == ["Two", "One"]
        assert await service.count_by_store(catalog.store.id) == 2
        assert await service.count_by_poster(catalog.poster.id) == 2
        assert await service.count_by_poster(catalog.voter.id) == 0

    @pytest.mark.asyncio
    async def test_unknown_store_raises(self, unit_env):
        service = await unit_env.get(DealService)

        with pytest.raises(NotFoundError):
            await service.list_by_store(uuid4())
