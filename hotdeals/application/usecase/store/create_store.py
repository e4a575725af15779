"""Create store use case."""

from pydantic import BaseModel, Field

from hotdeals.domain.service import StoreService

from .common import StoreItem


class CreateStoreRequest(BaseModel):
    """Create store request."""

    name: str = Field(min_length=1, max_length=100)
    logo: str | None = None


class CreateStoreUseCase:
    """Use case for registering a store."""

    def __init__(self, store_service: StoreService) -> None:
        """Initialize create store use case.

        Args:
            store_service: Store domain service
        """
        self.store_service = store_service

    async def execute(self, request: CreateStoreRequest) -> StoreItem:
        """Execute create store flow.

        Args:
            request: Create store request

        Returns:
            Created store
        """
        store = await self.store_service.create_store(request.name, request.logo)
        return StoreItem.from_store(store)
