"""Session token domain service."""

from datetime import datetime

import logfire

from tokiwa.config import AuthSettings
from tokiwa.domain.error import (
    BadSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
    SessionSigningError,
)
from tokiwa.domain.value import AuthenticatedPrincipal
from tokiwa.util.jwt import (
    SigningKeyError,
    TokenExpiredError,
    TokenFormatError,
    TokenSignatureError,
    create_token,
    verify_token,
)
from tokiwa.util.logging import mask_email

from .base import Service


class SessionService(Service):
    """Issues and validates signed, time-bounded session tokens.

    Stateless: validation depends only on the signature and the expiry
    claim, never on the identity store.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def mint(self, uid: str, email: str, issued_at: datetime | None = None) -> str:
        """Mint a session token.

        Args:
            uid: Identity uid
            email: Email the caller authenticated with
            issued_at: Issue time, defaults to now

        Returns:
            Signed session token

        Raises:
            SessionSigningError: If the token cannot be signed
        """
        with logfire.span("session_service.mint", uid=uid):
            try:
                token = create_token(uid, email, self.auth_settings, issued_at)
            except SigningKeyError as e:
                logfire.error("Session signing failed", uid=uid, error=str(e))
                raise SessionSigningError(str(e)) from e
            logfire.info("Session minted", uid=uid, email=mask_email(email))
            return token

    def validate(self, token: str) -> AuthenticatedPrincipal:
        """Validate a session token.

        Args:
            token: Session token presented by the caller

        Returns:
            Principal carried by the token

        Raises:
            BadSignatureError: If the signature does not verify
            MalformedTokenError: If the token or a required claim is malformed
            ExpiredTokenError: If the token has expired
            SessionSigningError: If no signing secret is configured
        """
        with logfire.span("session_service.validate"):
            try:
                payload = verify_token(token, self.auth_settings)
            except TokenExpiredError as e:
                logfire.info("Session token expired")
                raise ExpiredTokenError() from e
            except TokenSignatureError as e:
                logfire.warn("Session token signature rejected", reason=str(e))
                raise BadSignatureError() from e
            except TokenFormatError as e:
                logfire.warn("Session token malformed", reason=str(e))
                raise MalformedTokenError() from e
            except SigningKeyError as e:
                logfire.error("Session validation without signing key", error=str(e))
                raise SessionSigningError(str(e)) from e

            return AuthenticatedPrincipal(uid=payload.uid, email=payload.email)
