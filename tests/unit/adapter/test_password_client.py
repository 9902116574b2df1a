"""Unit tests for the password backend client."""

import json

import httpx
import pytest

from tokiwa.adapter.error import ProviderError
from tokiwa.adapter.password.client import (
    MockPasswordAuthClient,
    RealPasswordAuthClient,
    backend_error,
)
from tokiwa.domain.error import (
    AccountDisabledError,
    ConflictError,
    InvalidCredentialsError,
    RateLimitedError,
    ValidationError,
)

BASE_URL = "https://identitytoolkit.example/v1"


def backend(status_code: int, body: dict, seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body)

    return RealPasswordAuthClient("key-1", BASE_URL, transport=httpx.MockTransport(handler))


class TestBackendError:
    """Tests for backend error code mapping."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("EMAIL_NOT_FOUND", InvalidCredentialsError),
            ("INVALID_PASSWORD", InvalidCredentialsError),
            ("INVALID_LOGIN_CREDENTIALS", InvalidCredentialsError),
            ("USER_DISABLED", AccountDisabledError),
            ("TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled", RateLimitedError),
            ("EMAIL_EXISTS", ConflictError),
            ("WEAK_PASSWORD : Password should be at least 6 characters", ValidationError),
            ("INVALID_EMAIL", ValidationError),
            ("SOMETHING_NEW", ProviderError),
            ("", ProviderError),
        ],
    )
    def test_maps_codes(self, code, expected):
        assert isinstance(backend_error(code), expected)

    def test_wrong_password_and_unknown_email_look_the_same(self):
        assert str(backend_error("EMAIL_NOT_FOUND")) == str(
            backend_error("INVALID_PASSWORD")
        )


class TestRealPasswordAuthClient:
    """Tests for RealPasswordAuthClient."""

    @pytest.mark.asyncio
    async def test_verify_password_posts_credentials(self):
        # Arrange
        seen: list[httpx.Request] = []
        client = backend(200, {"localId": "uid-1", "email": "ada@x.io"}, seen)

        # Act
        account = await client.verify_password("ada@x.io", "Secret123")

        # Assert
        assert account.uid == "uid-1"
        assert account.email == "ada@x.io"
        request = seen[0]
        assert request.url.path == "/v1/accounts:signInWithPassword"
        assert request.url.params["key"] == "key-1"
        assert json.loads(request.content) == {
            "email": "ada@x.io",
            "password": "Secret123",
            "returnSecureToken": True,
        }

    @pytest.mark.asyncio
    async def test_create_account_uses_signup(self):
        seen: list[httpx.Request] = []
        client = backend(200, {"localId": "uid-2", "email": "new@x.io"}, seen)

        account = await client.create_account("new@x.io", "Secret123")

        assert account.uid == "uid-2"
        assert seen[0].url.path == "/v1/accounts:signUp"

    @pytest.mark.asyncio
    async def test_error_body_is_mapped(self):
        client = backend(400, {"error": {"code": 400, "message": "USER_DISABLED"}})

        with pytest.raises(AccountDisabledError):
            await client.verify_password("ada@x.io", "Secret123")

    @pytest.mark.asyncio
    async def test_missing_local_id_is_provider_error(self):
        client = backend(200, {"email": "ada@x.io"})

        with pytest.raises(ProviderError):
            await client.verify_password("ada@x.io", "Secret123")


class TestMockPasswordAuthClient:
    """Tests for the in-memory backend used by other tests."""

    @pytest.mark.asyncio
    async def test_known_account_verifies(self):
        client = MockPasswordAuthClient()

        account = await client.verify_password("Mock@Example.com", "MockPassw0rd")

        assert account.uid == "mockpassworduid"

    @pytest.mark.asyncio
    async def test_throttled_account_is_rate_limited(self):
        client = MockPasswordAuthClient()
        client.throttled.add("mock@example.com")

        with pytest.raises(RateLimitedError):
            await client.verify_password("mock@example.com", "MockPassw0rd")

    @pytest.mark.asyncio
    async def test_duplicate_signup_conflicts(self):
        client = MockPasswordAuthClient()

        with pytest.raises(ConflictError):
            await client.create_account("mock@example.com", "Another1")
