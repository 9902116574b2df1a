"""Authentication domain service and credential provider interfaces."""

import logfire

from tokiwa.domain.error import NotSupportedError
from tokiwa.domain.value.types import PasswordAccount, ProviderKind, ProviderProfile
from tokiwa.util.logging import mask_email

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    kind: ProviderKind

    # Unconfigured clients are left out of AuthService
    configured: bool = True

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> str:
        """Exchange an authorization code for a provider access token.

        Args:
            code: Authorization code from the provider callback
            redirect_uri: Redirect URI the code was issued for
            code_verifier: PKCE verifier, for providers that require one

        Returns:
            Provider access token

        Raises:
            InvalidCredentialsError: If the provider rejects the code
            ProviderError: If the provider cannot be reached or misbehaves
        """
        raise NotImplementedError

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Fetch the user's profile with a provider access token.

        Args:
            access_token: Token from :meth:`exchange_code`

        Returns:
            Verified provider profile

        Raises:
            InvalidCredentialsError: If the provider rejects the token
            ProviderError: If the provider cannot be reached or misbehaves
        """
        raise NotImplementedError

    async def authenticate(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> ProviderProfile:
        """Exchange a code and fetch the resulting profile."""
        access_token = await self.exchange_code(code, redirect_uri, code_verifier)
        return await self.fetch_profile(access_token)


class PasswordAuthClient:
    """Password credential backend interface."""

    async def verify_password(self, email: str, password: str) -> PasswordAccount:
        """Verify an email/password pair.

        Raises:
            InvalidCredentialsError: If the pair is wrong or unknown
            AccountDisabledError: If the account is disabled
            RateLimitedError: If the backend is throttling this account
            ProviderError: If the backend cannot be reached
        """
        raise NotImplementedError

    async def create_account(self, email: str, password: str) -> PasswordAccount:
        """Create a password account.

        Raises:
            ConflictError: If an account already exists for the email
            ValidationError: If the backend rejects the password
            ProviderError: If the backend cannot be reached
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations.

    Routes each credential to the adapter for its provider kind.
    """

    def __init__(
        self,
        oauth_clients: dict[ProviderKind, OAuthClient],
        password_client: PasswordAuthClient,
    ) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider kind to OAuth client implementation
            password_client: Password backend client
        """
        self.oauth_clients = oauth_clients
        self.password_client = password_client

    async def authenticate_oauth(
        self,
        kind: ProviderKind,
        code: str,
        redirect_uri: str,
        code_verifier: str | None = None,
    ) -> ProviderProfile:
        """Complete an OAuth code flow for any provider.

        Raises:
            NotSupportedError: If no client is configured for the provider
        """
        client = self.oauth_clients.get(kind)
        if not client:
            raise NotSupportedError(f"unsupported provider: {kind.value}")

        with logfire.span("auth_service.authenticate_oauth", kind=kind.value):
            profile = await client.authenticate(code, redirect_uri, code_verifier)
            logfire.info(
                "OAuth credential verified",
                kind=kind.value,
                provider_user_id=profile.provider_user_id,
                email_verified=profile.email_verified,
            )
            return profile

    async def verify_password(self, email: str, password: str) -> PasswordAccount:
        """Verify an email/password pair with the password backend."""
        with logfire.span("auth_service.verify_password", email=mask_email(email)):
            return await self.password_client.verify_password(email, password)

    async def create_password_account(
        self, email: str, password: str
    ) -> PasswordAccount:
        """Create an account in the password backend."""
        with logfire.span(
            "auth_service.create_password_account", email=mask_email(email)
        ):
            return await self.password_client.create_account(email, password)
