"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests may swap for an in-memory double
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider base that has subclasses is a swappable component: its
    subclasses are the production and mock variants, told apart by
    ``__is_mock__``. A provider without subclasses is used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
