"""Domain model entities."""

from tokiwa.domain.model.identity import Identity, ProviderBinding

__all__ = [
    "Identity",
    "ProviderBinding",
]
