"""Dependency injection module."""

from typing import Type

from tokiwa.util.di.application import ProdApplicationProvider
from tokiwa.util.di.base import Component, ProviderBase
from tokiwa.util.di.core import ProdConfigProvider
from tokiwa.util.di.domain import ProdDomainProvider
from tokiwa.util.di.infrastructure import (
    GitHubProvider,
    GoogleProvider,
    OAuthAggregatorProvider,
    PasswordProvider,
    PersistenceProvider,
    TwitterProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    GoogleProvider,
    GitHubProvider,
    TwitterProvider,
    PasswordProvider,
    PersistenceProvider,
    # OAuth aggregator (combines all OAuth clients)
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    A base without subclasses is a concrete provider and is used as-is.
    A base with subclasses is a mockable component; the subclass whose
    ``__is_mock__`` flag matches ``use_mock`` is chosen.

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "GitHubProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PasswordProvider",
    "PersistenceProvider",
    "TwitterProvider",
]
