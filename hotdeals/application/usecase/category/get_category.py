"""Get category use case."""

import logfire
from pydantic import BaseModel

from hotdeals.domain.service import CategoryService

from .common import CategoryItem


class GetCategoryRequest(BaseModel):
    """Get category request."""

    path: str


class GetCategoryResponse(BaseModel):
    """Get category response.

    ``category`` is None when the root path is requested.
    """

    category: CategoryItem | None
    children: list[CategoryItem]


class GetCategoryUseCase:
    """Use case for reading a category together with its direct children."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize get category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> GetCategoryResponse:
        """Execute get category flow.

        Raises:
            InvalidPathError: If the path is malformed
            NotFoundError: If the path is not the root and does not exist
        """
        with logfire.span("get_category.execute", path=request.path):
            category = await self.category_service.find_by_path(request.path)
            children = await self.category_service.children(request.path)
            return GetCategoryResponse(
                category=CategoryItem.from_category(category) if category else None,
                children=[CategoryItem.from_category(c) for c in children],
            )
