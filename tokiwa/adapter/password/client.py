"""Password backend client (Identity Toolkit REST API).

Credentials travel to the backend over TLS and are verified there; this
service never stores or transforms passwords.
"""

import uuid

import httpx
import logfire

from tokiwa.adapter.error import ProviderError
from tokiwa.domain.error import (
    AccountDisabledError,
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    RateLimitedError,
    ValidationError,
)
from tokiwa.domain.service.auth_service import PasswordAuthClient
from tokiwa.domain.value.types import PasswordAccount, normalize_email
from tokiwa.util.logging import mask_email

REQUEST_TIMEOUT = 30.0


def backend_error(code: str) -> DomainError:
    """Map an Identity Toolkit error code to a domain error.

    Codes may carry a suffix (``"TOO_MANY_ATTEMPTS_TRY_LATER : Access..."``),
    only the leading token is significant. Messages are fixed so backend
    text never reaches clients.
    """
    code = code.split(":", 1)[0].strip()
    if code in ("EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS"):
        return InvalidCredentialsError()
    if code == "USER_DISABLED":
        return AccountDisabledError()
    if code == "TOO_MANY_ATTEMPTS_TRY_LATER":
        return RateLimitedError()
    if code == "EMAIL_EXISTS":
        return ConflictError("an account with this email already exists")
    if code.startswith("WEAK_PASSWORD"):
        return ValidationError("password is too weak", field="password")
    if code == "INVALID_EMAIL":
        return ValidationError("invalid email format", field="email")
    if code == "MISSING_PASSWORD":
        return ValidationError("password is required", field="password")
    return ProviderError("password", f"backend error {code or 'UNKNOWN'}")


class RealPasswordAuthClient(PasswordAuthClient):
    """Identity Toolkit client for email/password accounts."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize password backend client.

        Args:
            api_key: Web API key of the backing project
            base_url: Identity Toolkit base URL
            transport: Optional httpx transport
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def verify_password(self, email: str, password: str) -> PasswordAccount:
        """Sign in with email and password."""
        return await self._call("accounts:signInWithPassword", email, password)

    async def create_account(self, email: str, password: str) -> PasswordAccount:
        """Create an email/password account."""
        account = await self._call("accounts:signUp", email, password)
        logfire.info("Password account created", uid=account.uid)
        return account

    async def _call(self, method: str, email: str, password: str) -> PasswordAccount:
        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=REQUEST_TIMEOUT
            ) as client:
                response = await client.post(
                    f"{self.base_url}/{method}",
                    params={"key": self.api_key},
                    json=payload,
                )
        except httpx.HTTPError as e:
            logfire.error("Password backend HTTP error", method=method, error=str(e))
            raise ProviderError("password", "HTTP error calling backend") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError("password", "backend returned invalid JSON") from e

        if response.status_code != 200:
            code = ""
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                code = str(body["error"].get("message", ""))
            error = backend_error(code)
            logfire.warn(
                "Password backend rejected request",
                method=method,
                status_code=response.status_code,
                code=code,
                email=mask_email(email),
            )
            raise error

        uid = body.get("localId") if isinstance(body, dict) else None
        if not uid:
            raise ProviderError("password", "backend response has no localId")

        return PasswordAccount(uid=uid, email=normalize_email(body.get("email") or email))


class MockPasswordAuthClient(PasswordAuthClient):
    """In-memory password backend for testing.

    Accounts live in ``accounts`` keyed by email. Emails listed in
    ``disabled`` or ``throttled`` fail the way the real backend does.
    """

    def __init__(self):
        """Initialize mock backend with one known account."""
        self.accounts: dict[str, tuple[str, str]] = {
            "mock@example.com": ("mockpassworduid", "MockPassw0rd"),
        }
        self.disabled: set[str] = set()
        self.throttled: set[str] = set()

    def add_account(self, email: str, password: str, uid: str | None = None) -> str:
        uid = uid or uuid.uuid4().hex[:28]
        self.accounts[normalize_email(email)] = (uid, password)
        return uid

    async def verify_password(self, email: str, password: str) -> PasswordAccount:
        """Check the pair against the in-memory accounts."""
        email = normalize_email(email)
        if email in self.throttled:
            raise backend_error("TOO_MANY_ATTEMPTS_TRY_LATER")
        account = self.accounts.get(email)
        if not account or account[1] != password:
            raise backend_error("INVALID_LOGIN_CREDENTIALS")
        if email in self.disabled:
            raise backend_error("USER_DISABLED")
        return PasswordAccount(uid=account[0], email=email)

    async def create_account(self, email: str, password: str) -> PasswordAccount:
        """Register a new in-memory account."""
        email = normalize_email(email)
        if email in self.accounts:
            raise backend_error("EMAIL_EXISTS")
        uid = self.add_account(email, password)
        return PasswordAccount(uid=uid, email=email)
