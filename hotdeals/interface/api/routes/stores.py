"""Store routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from hotdeals.application.usecase.deal import (
    ListStoreDealsRequest,
    ListStoreDealsResponse,
    ListStoreDealsUseCase,
)
from hotdeals.application.usecase.store import (
    CreateStoreRequest,
    CreateStoreUseCase,
    GetStoreRequest,
    GetStoreResponse,
    GetStoreUseCase,
    ListStoresRequest,
    ListStoresResponse,
    ListStoresUseCase,
    ReplaceStoreRequest,
    ReplaceStoreUseCase,
    StoreItem,
    UpdateStoreLogoRequest,
    UpdateStoreLogoUseCase,
)
from hotdeals.domain.value import DealStatus
from hotdeals.interface.error import http_error

router = APIRouter(prefix="/stores", tags=["stores"], route_class=DishkaRoute)


class ReplaceStoreAPIRequest(BaseModel):
    """API request for replacing a store."""

    name: str = Field(min_length=1, max_length=100)
    logo: str | None = None


class UpdateLogoAPIRequest(BaseModel):
    """API request for changing a logo."""

    logo: str | None


@router.post("", response_model=StoreItem, status_code=status.HTTP_201_CREATED)
async def create_store(
    request: CreateStoreRequest,
    create_store_use_case: FromDishka[CreateStoreUseCase],
) -> StoreItem:
    """Register a store."""
    try:
        return await create_store_use_case.execute(request)
    except Exception as e:
        raise http_error(e, "create store") from e


@router.get("", response_model=ListStoresResponse)
async def list_stores(
    list_stores_use_case: FromDishka[ListStoresUseCase],
    limit: int = 100,
    offset: int = 0,
) -> ListStoresResponse:
    """List stores by name."""
    try:
        return await list_stores_use_case.execute(
            ListStoresRequest(limit=limit, offset=offset)
        )
    except Exception as e:
        raise http_error(e, "list stores") from e


@router.get("/{store_id}", response_model=GetStoreResponse)
async def get_store(
    store_id: str,
    get_store_use_case: FromDishka[GetStoreUseCase],
) -> GetStoreResponse:
    """Get a store with its deal count."""
    try:
        return await get_store_use_case.execute(GetStoreRequest(store_id=store_id))
    except Exception as e:
        raise http_error(e, "get store") from e


@router.put("/{store_id}", response_model=StoreItem)
async def replace_store(
    store_id: str,
    request: ReplaceStoreAPIRequest,
    replace_store_use_case: FromDishka[ReplaceStoreUseCase],
) -> StoreItem:
    """Replace a store record (last write wins)."""
    try:
        return await replace_store_use_case.execute(
            ReplaceStoreRequest(store_id=store_id, name=request.name, logo=request.logo)
        )
    except Exception as e:
        raise http_error(e, "replace store") from e


@router.patch("/{store_id}/logo", response_model=StoreItem)
async def update_store_logo(
    store_id: str,
    request: UpdateLogoAPIRequest,
    update_store_logo_use_case: FromDishka[UpdateStoreLogoUseCase],
) -> StoreItem:
    """Change a store's logo."""
    try:
        return await update_store_logo_use_case.execute(
            UpdateStoreLogoRequest(store_id=store_id, logo=request.logo)
        )
    except Exception as e:
        raise http_error(e, "update store logo") from e


@router.get("/{store_id}/deals", response_model=ListStoreDealsResponse)
async def list_store_deals(
    store_id: str,
    list_store_deals_use_case: FromDishka[ListStoreDealsUseCase],
    status_filter: DealStatus | None = DealStatus.ACTIVE,
    include_all: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> ListStoreDealsResponse:
    """List a store's deals, newest first.

    ``include_all=true`` lists deals in every status.
    """
    try:
        return await list_store_deals_use_case.execute(
            ListStoreDealsRequest(
                store_id=store_id,
                status=None if include_all else status_filter,
                limit=limit,
                offset=offset,
            )
        )
    except Exception as e:
        raise http_error(e, "list store deals") from e
