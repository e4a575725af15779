"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One application step, run inside a single request scope."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the step for ``request``."""
