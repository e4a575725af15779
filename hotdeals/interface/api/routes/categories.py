"""Category routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from hotdeals.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
    GetCategoryRequest,
    GetCategoryResponse,
    GetCategoryUseCase,
    ListTagsResponse,
    ListTagsUseCase,
)
from hotdeals.interface.error import http_error

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


@router.post(
    "", response_model=CreateCategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    request: CreateCategoryRequest,
    create_category_use_case: FromDishka[CreateCategoryUseCase],
) -> CreateCategoryResponse:
    """Create a category or tag.

    Returns:
        Created category

    Raises:
        HTTPException: 409 if the path exists, 422 if the path, parent or
            names are invalid
    """
    try:
        return await create_category_use_case.execute(request)
    except Exception as e:
        raise http_error(e, "create category") from e


@router.get("", response_model=GetCategoryResponse)
async def get_category(
    get_category_use_case: FromDishka[GetCategoryUseCase],
    path: str = "/",
) -> GetCategoryResponse:
    """Get a category and its direct children.

    ``path=/`` lists the top-level categories.
    """
    try:
        return await get_category_use_case.execute(GetCategoryRequest(path=path))
    except Exception as e:
        raise http_error(e, "get category") from e


@router.get("/tags", response_model=ListTagsResponse)
async def list_tags(list_tags_use_case: FromDishka[ListTagsUseCase]) -> ListTagsResponse:
    """List all tags."""
    try:
        return await list_tags_use_case.execute()
    except Exception as e:
        raise http_error(e, "list tags") from e
