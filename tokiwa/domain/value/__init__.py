"""Domain value objects for identity federation."""

from tokiwa.domain.value.types import (
    AuthenticatedPrincipal,
    EmailAddress,
    PasswordAccount,
    ProviderKind,
    ProviderProfile,
    normalize_email,
)

__all__ = [
    "AuthenticatedPrincipal",
    "EmailAddress",
    "PasswordAccount",
    "ProviderKind",
    "ProviderProfile",
    "normalize_email",
]
