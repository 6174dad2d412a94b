"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["persistence", "clock"]


class ProviderBase(Provider):
    """Base for all DI providers with unified metadata.

    Attributes:
        __mock_component__: Component name (for mockable components, None for concrete providers)
        __is_mock__: Whether this is a mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


class MissingProviderError(LookupError):
    """No provider implementation matches the requested mode."""

    def __init__(self, component: str, use_mock: bool):
        self.component = component
        self.use_mock = use_mock
        kind = "mock" if use_mock else "production"
        super().__init__(f"No {kind} implementation for {component}")
