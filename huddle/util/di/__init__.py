"""Dependency injection wiring for Huddle."""

from typing import Type

from huddle.util.di.application import ProdApplicationProvider
from huddle.util.di.base import Component, ProviderBase
from huddle.util.di.core import ProdConfigProvider
from huddle.util.di.domain import ProdDomainProvider
from huddle.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    RepositoryProvider,
)

# Every container is built from these, in this order
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    RepositoryProvider,
    PersistenceProvider,  # entity store, mockable
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        ``base`` itself when it is concrete, otherwise the matching subclass

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {
        getattr(cls, "__is_mock__", False): cls for cls in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        component = getattr(base, "__mock_component__", None) or base.__name__
        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {component}") from None


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "RepositoryProvider",
    "get_provider",
]
