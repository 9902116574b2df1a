"""GitHub OAuth client implementation."""

from typing import Any

import httpx
import logfire

from tokiwa.adapter.error import ProviderError
from tokiwa.adapter.oauth import HttpOAuthClient, MockOAuthClient
from tokiwa.domain.error import InvalidCredentialsError
from tokiwa.domain.service.auth_service import OAuthClient
from tokiwa.domain.value.types import ProviderKind, ProviderProfile


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    kind = ProviderKind.GITHUB


def choose_email(entries: list[dict[str, Any]]) -> tuple[str, bool]:
    """Pick the address to bind from GitHub's ``/user/emails`` list.

    Preference: primary and verified, then primary, then the first entry.

    Returns:
        Tuple of (email, verified), or ("", False) for an empty list
    """
    for entry in entries:
        if entry.get("primary") and entry.get("verified"):
            return entry.get("email") or "", True
    for entry in entries:
        if entry.get("primary"):
            return entry.get("email") or "", bool(entry.get("verified"))
    if entries:
        return entries[0].get("email") or "", bool(entries[0].get("verified"))
    return "", False


class RealGitHubOAuthClient(HttpOAuthClient, GitHubOAuthClient):
    """GitHub OAuth App client.

    GitHub answers token exchanges with 200 even for bad codes and reports
    the failure in an ``error`` field, handled by ``_access_token``.
    """

    token_url = "https://github.com/login/oauth/access_token"
    user_url = "https://api.github.com/user"
    emails_url = "https://api.github.com/user/emails"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(client_id, client_secret, transport)

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> str:
        """Exchange authorization code for an access token."""
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        if code_verifier:
            data["code_verifier"] = code_verifier

        result = await self._request(
            "POST",
            self.token_url,
            stage="token exchange",
            rejected_statuses=(400, 401),
            data=data,
            headers={"Accept": "application/json"},
        )
        return self._access_token(result)

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Get user information, resolving the email from ``/user/emails``.

        The public profile email is often hidden, and even when shown it
        carries no verification flag, so the emails list is the authority.
        """
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }
        user = await self._request(
            "GET",
            self.user_url,
            stage="user info request",
            rejected_statuses=(401, 403),
            headers=headers,
        )
        if not isinstance(user, dict) or user.get("id") is None:
            raise ProviderError(self.kind.value, "user info has no id")

        email, verified = await self._resolve_email(headers, user.get("email") or "")

        logfire.info(
            "GitHub OAuth completed",
            user_id=user["id"],
            login=user.get("login"),
            email_verified=verified,
        )

        return ProviderProfile(
            kind=ProviderKind.GITHUB,
            provider_user_id=str(user["id"]),
            email=email,
            display_name=user.get("name") or user.get("login"),
            avatar_url=user.get("avatar_url"),
            email_verified=verified,
        )

    async def _resolve_email(
        self, headers: dict[str, str], public_email: str
    ) -> tuple[str, bool]:
        try:
            entries = await self._request(
                "GET",
                self.emails_url,
                stage="emails request",
                rejected_statuses=(401, 403, 404),
                headers=headers,
            )
        except InvalidCredentialsError:
            # Token lacks the user:email scope
            return public_email, False

        if not isinstance(entries, list):
            raise ProviderError(self.kind.value, "emails response is not a list")

        if public_email:
            for entry in entries:
                if entry.get("email") == public_email:
                    return public_email, bool(entry.get("verified"))
            return public_email, False

        return choose_email(entries)


class MockGitHubOAuthClient(MockOAuthClient, GitHubOAuthClient):
    """Mock GitHub OAuth client for testing."""

    def __init__(self):
        """Initialize mock client with a deterministic verified profile."""
        super().__init__(
            ProviderKind.GITHUB,
            ProviderProfile(
                kind=ProviderKind.GITHUB,
                provider_user_id="4242",
                email="mock@github.example",
                display_name="Mock GitHub User",
                avatar_url="https://example.com/avatar.jpg",
                email_verified=True,
            ),
        )
