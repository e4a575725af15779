"""List tags use case."""

from pydantic import BaseModel

from hotdeals.domain.service import CategoryService

from .common import CategoryItem


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[CategoryItem]


class ListTagsUseCase:
    """Use case for listing all tags."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self) -> ListTagsResponse:
        tags = await self.category_service.list_tags()
        return ListTagsResponse(tags=[CategoryItem.from_category(t) for t in tags])
