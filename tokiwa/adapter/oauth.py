"""Shared plumbing for OAuth 2.0 authorization-code clients."""

from typing import Any

import httpx
import logfire

from tokiwa.adapter.error import ProviderError
from tokiwa.domain.error import InvalidCredentialsError
from tokiwa.domain.service.auth_service import OAuthClient
from tokiwa.domain.value.types import ProviderKind, ProviderProfile

REQUEST_TIMEOUT = 30.0


class HttpOAuthClient(OAuthClient):
    """OAuth client talking to a provider over HTTPS.

    Subclasses supply the token request and the profile parsing. Status
    handling and transport errors are shared so that every provider maps
    failures the same way: a rejected code or token becomes
    ``InvalidCredentialsError``, anything else becomes ``ProviderError``.
    Upstream response bodies are logged, never surfaced to callers.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.configured = bool(client_id and client_secret)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        stage: str,
        rejected_statuses: tuple[int, ...],
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            InvalidCredentialsError: If the status is in ``rejected_statuses``
            ProviderError: On transport failure, other statuses or a non-JSON body
        """
        provider = self.kind.value
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logfire.error(f"{provider} {stage} HTTP error", error=str(e))
            raise ProviderError(provider, f"HTTP error during {stage}") from e

        if response.status_code in rejected_statuses:
            logfire.warn(
                f"{provider} {stage} rejected",
                status_code=response.status_code,
                error=response.text,
            )
            raise InvalidCredentialsError(f"{self.kind.display_name} sign-in failed")

        if response.status_code != 200:
            logfire.error(
                f"{provider} {stage} failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(provider, f"{stage} failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(provider, f"{stage} returned invalid JSON") from e

    def _access_token(self, result: Any) -> str:
        if not isinstance(result, dict):
            raise ProviderError(self.kind.value, "token response is not an object")
        if "error" in result:
            logfire.warn(
                f"{self.kind.value} token exchange rejected",
                error=result.get("error"),
                description=result.get("error_description"),
            )
            raise InvalidCredentialsError(f"{self.kind.display_name} sign-in failed")
        token = result.get("access_token")
        if not token:
            raise ProviderError(self.kind.value, "token response has no access_token")
        return token


class MockOAuthClient(OAuthClient):
    """Deterministic OAuth client for tests.

    ``exchange_code`` returns a token derived from the code; ``fetch_profile``
    returns the profile registered for that code in ``profiles`` or the
    default profile. Codes in ``rejected_codes`` fail like a real provider
    rejecting them.
    """

    def __init__(self, kind: ProviderKind, default_profile: ProviderProfile) -> None:
        self.kind = kind
        self.default_profile = default_profile
        self.profiles: dict[str, ProviderProfile] = {}
        self.rejected_codes: set[str] = {"invalid"}
        self.exchanges: list[tuple[str, str, str | None]] = []

    async def exchange_code(
        self, code: str, redirect_uri: str, code_verifier: str | None = None
    ) -> str:
        """Return a mock access token for the code."""
        if code in self.rejected_codes:
            raise InvalidCredentialsError(f"{self.kind.display_name} sign-in failed")
        self.exchanges.append((code, redirect_uri, code_verifier))
        return f"mock-token:{code}"

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Return the registered profile for the token's code."""
        code = access_token.removeprefix("mock-token:")
        return self.profiles.get(code, self.default_profile)
