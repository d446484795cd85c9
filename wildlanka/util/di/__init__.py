"""Dependency injection wiring.

``PROVIDERS`` lists every provider base once. Bases without subclasses are
used as-is; a base with subclasses is a swappable component (see
``ProviderBase``) whose production or mock implementation is picked by
``get_provider``.
"""

from typing import Type

from wildlanka.util.di.application import ProdApplicationProvider
from wildlanka.util.di.base import Component, ProviderBase
from wildlanka.util.di.core import ProdConfigProvider
from wildlanka.util.di.domain import ProdDomainProvider
from wildlanka.util.di.infrastructure import (
    IdentityProvider,
    PersistenceProvider,
    ProdIdentityProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    IdentityProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider base to the class to instantiate.

    Mock implementations only become visible once their module is imported,
    which the test package does.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the mock implementation of a swappable component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
    "IdentityProvider",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
