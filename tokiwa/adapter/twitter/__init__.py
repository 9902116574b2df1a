"""Twitter (X) OAuth 2.0 adapter with PKCE."""

from .client import MockTwitterOAuthClient, RealTwitterOAuthClient, TwitterOAuthClient

__all__ = ["TwitterOAuthClient", "RealTwitterOAuthClient", "MockTwitterOAuthClient"]
