"""Category use cases."""

from .common import CategoryIconItem, CategoryItem
from .create_category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
)
from .get_category import GetCategoryRequest, GetCategoryResponse, GetCategoryUseCase
from .list_tags import ListTagsResponse, ListTagsUseCase

__all__ = [
    "CategoryIconItem",
    "CategoryItem",
    "CreateCategoryRequest",
    "CreateCategoryResponse",
    "CreateCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryResponse",
    "GetCategoryUseCase",
    "ListTagsResponse",
    "ListTagsUseCase",
]
