"""Twitter OAuth 2.0 client implementation.

Twitter requires PKCE on the authorization-code flow and authenticates the
confidential client with HTTP Basic on the token endpoint.
"""

import httpx
import logfire

from tokiwa.adapter.error import ProviderError
from tokiwa.adapter.oauth import HttpOAuthClient, MockOAuthClient
from tokiwa.domain.service.auth_service import OAuthClient
from tokiwa.domain.value.types import ProviderKind, ProviderProfile


class TwitterOAuthClient(OAuthClient):
    """Base class for Twitter OAuth clients.

    Provides type distinction for dependency injection.
    """

    kind = ProviderKind.TWITTER


class RealTwitterOAuthClient(HttpOAuthClient, TwitterOAuthClient):
    """Twitter OAuth 2.0 client with PKCE support."""

    token_url = "https://api.twitter.com/2/oauth2/token"
    user_info_url = "https://api.twitter.com/2/users/me"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        default_code_verifier: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Twitter OAuth client.

        Args:
            client_id: Twitter OAuth client ID
            client_secret: Twitter OAuth client secret
            default_code_verifier: Verifier used when the caller sends none
            transport: Optional httpx transport
        """
        super().__init__(client_id, client_secret, transport)
        self.default_code_verifier = default_code_verifier

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> str:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback
            redirect_uri: Redirect URI the code was issued for
            code_verifier: PKCE code verifier

        Returns:
            Access token
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier or self.default_code_verifier,
        }

        result = await self._request(
            "POST",
            self.token_url,
            stage="token exchange",
            rejected_statuses=(400, 401),
            data=data,
            auth=(self.client_id, self.client_secret),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        return self._access_token(result)

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Get user information from Twitter API.

        ``confirmed_email`` is only returned to apps approved for email
        access; without it the profile has no email.
        """
        params = {"user.fields": "id,name,username,profile_image_url,confirmed_email"}

        result = await self._request(
            "GET",
            self.user_info_url,
            stage="user info request",
            rejected_statuses=(401, 403),
            params=params,
            headers={"Authorization": f"Bearer {access_token}"},
        )

        data = result.get("data") if isinstance(result, dict) else None
        if not isinstance(data, dict) or not data.get("id"):
            raise ProviderError(self.kind.value, "user info has no id")

        email = data.get("confirmed_email") or ""

        logfire.info(
            "Twitter OAuth completed",
            username=data.get("username"),
            user_id=data["id"],
            has_email=bool(email),
        )

        return ProviderProfile(
            kind=ProviderKind.TWITTER,
            provider_user_id=str(data["id"]),
            email=email,
            display_name=data.get("name") or data.get("username"),
            avatar_url=data.get("profile_image_url"),
            email_verified=bool(email),
        )


class MockTwitterOAuthClient(MockOAuthClient, TwitterOAuthClient):
    """Mock Twitter OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(self):
        """Initialize mock client without real OAuth configuration."""
        super().__init__(
            ProviderKind.TWITTER,
            ProviderProfile(
                kind=ProviderKind.TWITTER,
                provider_user_id="mocktwitter123",
                email="mock@twitter.example",
                display_name="Mock Twitter User",
                avatar_url="https://example.com/avatar.jpg",
                email_verified=True,
            ),
        )
