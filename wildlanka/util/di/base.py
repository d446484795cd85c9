"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests swap for in-process fakes
Component = Literal["identity", "persistence"]


class ProviderBase(Provider):
    """Provider carrying swap metadata.

    A component base sets ``__mock_component__``; its implementations
    subclass it and set ``__is_mock__``.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
