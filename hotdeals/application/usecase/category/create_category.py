"""Create category use case."""

import logfire
from pydantic import BaseModel, Field

from hotdeals.domain.service import CategoryService
from hotdeals.domain.value import CategoryIcon

from .common import CategoryIconItem, CategoryItem


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    path: str = Field(max_length=255)
    parent: str = Field(default="/", max_length=255)
    names: dict[str, str]  # locale -> display name
    icon: CategoryIconItem | None = None
    is_tag: bool = False


class CreateCategoryResponse(CategoryItem):
    """Create category response."""


class CreateCategoryUseCase:
    """Use case for adding a category or tag to the tree."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CreateCategoryResponse:
        """Execute create category flow.

        Args:
            request: Create category request

        Returns:
            Created category

        Raises:
            InvalidPathError: If a path is malformed or mismatched
            InvalidNamesError: If names are empty or blank
            DuplicatePathError: If the path exists
            MissingParentError: If the parent does not exist
        """
        with logfire.span(
            "create_category.execute", path=request.path, is_tag=request.is_tag
        ):
            icon = CategoryIcon(**request.icon.model_dump()) if request.icon else None
            category = await self.category_service.create_category(
                path=request.path,
                parent=request.parent,
                names=request.names,
                icon=icon,
                is_tag=request.is_tag,
            )
            return CreateCategoryResponse(
                **CategoryItem.from_category(category).model_dump()
            )
