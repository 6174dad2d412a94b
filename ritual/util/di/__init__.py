"""Dependency injection module."""

from typing import Type

from ritual.util.di.application import ProdApplicationProvider
from ritual.util.di.base import Component, MissingProviderError, ProviderBase
from ritual.util.di.core import ProdConfigProvider
from ritual.util.di.domain import ProdDomainProvider
from ritual.util.di.infrastructure import (
    ClockProvider,
    PersistenceProvider,
    ProdClockProvider,
    ProdPersistenceProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    PersistenceProvider,
    ClockProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    - No subclasses: Concrete provider, use directly
    - Has subclasses: Mockable component, select by __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        MissingProviderError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        component = getattr(base, "__mock_component__", None) or base.__name__
        raise MissingProviderError(component, use_mock)

    return impl


__all__ = [
    "Component",
    "MissingProviderError",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "ClockProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdClockProvider",
    "ProdPersistenceProvider",
]
