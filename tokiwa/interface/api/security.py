"""Bearer session authentication for API routes."""

from tokiwa.domain.error import MissingCredentialsError
from tokiwa.domain.service import SessionService
from tokiwa.domain.value import AuthenticatedPrincipal


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        MissingCredentialsError: If the header is absent or not a bearer credential
    """
    if not authorization:
        raise MissingCredentialsError()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise MissingCredentialsError("bearer session token required")
    return token


def authenticate(
    authorization: str | None, session_service: SessionService
) -> AuthenticatedPrincipal:
    """Validate the request's bearer session token.

    Called on every authenticated request; nothing is cached.

    Raises:
        AuthError: If the credential is missing or invalid
    """
    return session_service.validate(bearer_token(authorization))
