"""Test configuration and fixtures."""

from dataclasses import dataclass

import logfire

from hotdeals.domain.model import Category, Store, User
from hotdeals.domain.service import CategoryService, StoreService, UserService

# Spans and events stay in-process during tests
logfire.configure(send_to_logfire=False, console=False)


@dataclass
class Catalog:
    """Reference data most deal tests need."""

    poster: User
    voter: User
    store: Store
    computers: Category
    video_cards: Category
    electronics: Category
    sale: Category


async def make_catalog(env) -> Catalog:
    """Helper to create a small catalog through the domain services.

    Creates two users, one store, ``/computers``, ``/computers/video-cards``,
    ``/electronics`` and the ``/sale`` tag.

    Args:
        env: Request-scoped test container

    Returns:
        The created entities
    """
    category_service = await env.get(CategoryService)
    store_service = await env.get(StoreService)
    user_service = await env.get(UserService)

    poster = await user_service.create_user(uid="poster-uid", nickname="Poster")
    voter = await user_service.create_user(uid="voter-uid", nickname="Voter")
    store = await store_service.create_store("Amazon", "https://example.com/amazon.png")
    computers = await category_service.create_category(
        "/computers", "/", {"en": "Computers", "tr": "Bilgisayar"}
    )
    video_cards = await category_service.create_category(
        "/computers/video-cards", "/computers", {"en": "Video Cards"}
    )
    electronics = await category_service.create_category(
        "/electronics", "/", {"en": "Electronics"}
    )
    sale = await category_service.create_category(
        "/sale", "/", {"en": "Sale"}, is_tag=True
    )
    return Catalog(
        poster=poster,
        voter=voter,
        store=store,
        computers=computers,
        video_cards=video_cards,
        electronics=electronics,
        sale=sale,
    )
