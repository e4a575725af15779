"""Deal routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from hotdeals.application.usecase.deal import (
    DealItem,
    ExpireDealsRequest,
    ExpireDealsResponse,
    ExpireDealsUseCase,
    GetDealRequest,
    GetDealUseCase,
    ListCategoryDealsRequest,
    ListCategoryDealsResponse,
    ListCategoryDealsUseCase,
    PostDealRequest,
    PostDealUseCase,
    SetDealStatusRequest,
    SetDealStatusUseCase,
    UpdateDealRequest,
    UpdateDealUseCase,
    VoteDealRequest,
    VoteDealUseCase,
)
from hotdeals.domain.error import NotAuthorizedError
from hotdeals.domain.value import (
    ActorRole,
    DealSortField,
    DealStatus,
    SortOrder,
    VoteDirection,
)
from hotdeals.interface.api.caller import actor_role, require_user_id
from hotdeals.interface.error import http_error

router = APIRouter(prefix="/deals", tags=["deals"], route_class=DishkaRoute)


class PostDealAPIRequest(BaseModel):
    """API request for posting a deal."""

    store_id: str
    category: str
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=3000)
    original_price: float
    price: float
    photos: list[str] = Field(default_factory=list)
    cover_photo: str | None = None
    tags: list[str] = Field(default_factory=list)
    location: str | None = None
    deal_url: str | None = None


class UpdateDealAPIRequest(BaseModel):
    """API request for editing a deal. Omitted fields keep their value."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = Field(default=None, min_length=1, max_length=3000)
    original_price: float | None = None
    price: float | None = None
    photos: list[str] | None = None
    cover_photo: str | None = None
    tags: list[str] | None = None
    location: str | None = None
    deal_url: str | None = None


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    direction: VoteDirection


class SetStatusAPIRequest(BaseModel):
    """API request for a lifecycle change."""

    status: DealStatus


class ExpireAPIRequest(BaseModel):
    """API request for the expiry scan."""

    cutoff: datetime | None = None


@router.post("", response_model=DealItem, status_code=status.HTTP_201_CREATED)
async def post_deal(
    request: PostDealAPIRequest,
    post_deal_use_case: FromDishka[PostDealUseCase],
    x_user_id: str | None = Header(default=None),
) -> DealItem:
    """Post a new deal as the caller.

    Raises:
        HTTPException: 401 without a caller, 422 if a price is negative or a
            reference does not resolve
    """
    try:
        return await post_deal_use_case.execute(
            PostDealRequest(posted_by=require_user_id(x_user_id), **request.model_dump())
        )
    except Exception as e:
        raise http_error(e, "post deal") from e


@router.get("", response_model=ListCategoryDealsResponse)
async def list_deals(
    list_category_deals_use_case: FromDishka[ListCategoryDealsUseCase],
    path: str = "/",
    status_filter: DealStatus | None = DealStatus.ACTIVE,
    include_all: bool = False,
    sort_by: DealSortField = DealSortField.CREATED_AT,
    order: SortOrder = SortOrder.DESC,
    cursor: str | None = None,
    limit: int | None = None,
    deadline: float | None = None,
    x_user_id: str | None = Header(default=None),
) -> ListCategoryDealsResponse:
    """List deals under a category and its subcategories.

    Pass the returned ``next_cursor`` back as ``cursor`` with the same sort
    to fetch the next page.
    """
    try:
        return await list_category_deals_use_case.execute(
            ListCategoryDealsRequest(
                path=path,
                status=None if include_all else status_filter,
                sort_by=sort_by,
                order=order,
                cursor=cursor,
                limit=limit,
                deadline=deadline,
                viewer_id=x_user_id,
            )
        )
    except Exception as e:
        raise http_error(e, "list deals") from e


@router.post("/expire", response_model=ExpireDealsResponse)
async def expire_deals(
    request: ExpireAPIRequest,
    expire_deals_use_case: FromDishka[ExpireDealsUseCase],
    x_actor_role: str | None = Header(default=None),
) -> ExpireDealsResponse:
    """Run the expiry scan. Only the system actor may call this."""
    try:
        role = actor_role(x_actor_role)
        if role != ActorRole.SYSTEM:
            raise NotAuthorizedError("run the expiry scan", role.value)
        return await expire_deals_use_case.execute(
            ExpireDealsRequest(cutoff=request.cutoff)
        )
    except Exception as e:
        raise http_error(e, "expire deals") from e


@router.get("/{deal_id}", response_model=DealItem)
async def get_deal(
    deal_id: str,
    get_deal_use_case: FromDishka[GetDealUseCase],
    x_user_id: str | None = Header(default=None),
) -> DealItem:
    """Open a deal (counts as a view)."""
    try:
        return await get_deal_use_case.execute(
            GetDealRequest(deal_id=deal_id, viewer_id=x_user_id)
        )
    except Exception as e:
        raise http_error(e, "get deal") from e


@router.post("/{deal_id}/votes", response_model=DealItem)
async def vote(
    deal_id: str,
    request: VoteAPIRequest,
    vote_deal_use_case: FromDishka[VoteDealUseCase],
    x_user_id: str | None = Header(default=None),
) -> DealItem:
    """Vote UP or DOWN on a deal, or RETRACT a vote.

    Raises:
        HTTPException: 404 if the deal is missing or removed, 503 with
            Retry-After if the deal stays locked
    """
    try:
        return await vote_deal_use_case.execute(
            VoteDealRequest(
                deal_id=deal_id,
                user_id=require_user_id(x_user_id),
                direction=request.direction,
            )
        )
    except Exception as e:
        raise http_error(e, "vote") from e


@router.put("/{deal_id}/status", response_model=DealItem)
async def set_deal_status(
    deal_id: str,
    request: SetStatusAPIRequest,
    set_deal_status_use_case: FromDishka[SetDealStatusUseCase],
    x_actor_role: str | None = Header(default=None),
) -> DealItem:
    """Move a deal through its lifecycle.

    Raises:
        HTTPException: 409 for an illegal transition, 403 if the caller's
            role may not make it
    """
    try:
        return await set_deal_status_use_case.execute(
            SetDealStatusRequest(
                deal_id=deal_id,
                status=request.status,
                actor_role=actor_role(x_actor_role),
            )
        )
    except Exception as e:
        raise http_error(e, "set deal status") from e


@router.patch("/{deal_id}", response_model=DealItem)
async def update_deal(
    deal_id: str,
    request: UpdateDealAPIRequest,
    update_deal_use_case: FromDishka[UpdateDealUseCase],
    x_user_id: str | None = Header(default=None),
) -> DealItem:
    """Edit the caller's own deal.

    Raises:
        HTTPException: 403 if the caller did not post the deal, 404 if it is
            missing or removed, 422 for a negative price or unknown tag
    """
    try:
        return await update_deal_use_case.execute(
            UpdateDealRequest(
                deal_id=deal_id,
                editor_id=require_user_id(x_user_id),
                **request.model_dump(),
            )
        )
    except Exception as e:
        raise http_error(e, "update deal") from e
