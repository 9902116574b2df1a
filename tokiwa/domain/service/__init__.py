"""Domain services."""

from .account_linker import AccountLinker
from .auth_service import AuthService, OAuthClient, PasswordAuthClient
from .base import Service
from .identity_resolver import IdentityResolver
from .session_service import SessionService

__all__ = [
    "AccountLinker",
    "AuthService",
    "IdentityResolver",
    "OAuthClient",
    "PasswordAuthClient",
    "Service",
    "SessionService",
]
