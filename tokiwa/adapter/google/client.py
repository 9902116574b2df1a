"""Google OAuth 2.0 client implementation."""

import httpx
import logfire

from tokiwa.adapter.error import ProviderError
from tokiwa.adapter.oauth import HttpOAuthClient, MockOAuthClient
from tokiwa.domain.service.auth_service import OAuthClient
from tokiwa.domain.value.types import ProviderKind, ProviderProfile


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    kind = ProviderKind.GOOGLE


class RealGoogleOAuthClient(HttpOAuthClient, GoogleOAuthClient):
    """Google OAuth 2.0 authorization-code client."""

    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            transport: Optional httpx transport
        """
        super().__init__(client_id, client_secret, transport)

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> str:
        """Exchange authorization code for an access token.

        Google rejects invalid or reused codes with 400 ``invalid_grant``.
        """
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
        }
        if code_verifier:
            data["code_verifier"] = code_verifier

        result = await self._request(
            "POST",
            self.token_url,
            stage="token exchange",
            rejected_statuses=(400, 401),
            data=data,
        )
        return self._access_token(result)

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Get user information from the Google userinfo endpoint."""
        result = await self._request(
            "GET",
            self.user_info_url,
            stage="user info request",
            rejected_statuses=(401, 403),
            headers={"Authorization": f"Bearer {access_token}"},
        )

        if not isinstance(result, dict) or not result.get("id"):
            raise ProviderError(self.kind.value, "user info has no id")

        logfire.info(
            "Google OAuth completed",
            user_id=result["id"],
            verified_email=result.get("verified_email", False),
        )

        return ProviderProfile(
            kind=ProviderKind.GOOGLE,
            provider_user_id=str(result["id"]),
            email=result.get("email") or "",
            display_name=result.get("name"),
            avatar_url=result.get("picture"),
            email_verified=bool(result.get("verified_email", False)),
        )


class MockGoogleOAuthClient(MockOAuthClient, GoogleOAuthClient):
    """Mock Google OAuth client for testing."""

    def __init__(self):
        """Initialize mock client with a deterministic verified profile."""
        super().__init__(
            ProviderKind.GOOGLE,
            ProviderProfile(
                kind=ProviderKind.GOOGLE,
                provider_user_id="mockgoogle123",
                email="mock@gmail.com",
                display_name="Mock Google User",
                avatar_url="https://example.com/avatar.jpg",
                email_verified=True,
            ),
        )
