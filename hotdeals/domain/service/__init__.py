"""Domain services for the deals marketplace."""

from hotdeals.domain.service.base import Service
from hotdeals.domain.service.category_service import CategoryService
from hotdeals.domain.service.deal_service import DealPage, DealService
from hotdeals.domain.service.reference_service import ReferenceService
from hotdeals.domain.service.store_service import StoreService
from hotdeals.domain.service.user_service import UserService

__all__ = [
    "CategoryService",
    "DealPage",
    "DealService",
    "ReferenceService",
    "Service",
    "StoreService",
    "UserService",
]
