"""Domain layer errors.

Every error the core raises derives from ``DomainError`` so the interface
layer can translate the whole family into HTTP responses in one place.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """A required field is missing, empty or malformed."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class AuthError(DomainError):
    """Base for credential and session failures."""

    pass


class MissingCredentialsError(AuthError):
    """No bearer credential was presented."""

    def __init__(self, message: str = "authentication required"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """The presented credential was rejected by its provider."""

    def __init__(self, message: str = "invalid email or password"):
        super().__init__(message)


class AccountDisabledError(AuthError):
    """The backing account exists but has been disabled."""

    def __init__(self, message: str = "account disabled"):
        super().__init__(message)


class RateLimitedError(AuthError):
    """The credential backend is throttling attempts for this account."""

    def __init__(self, message: str = "too many attempts, try again later"):
        super().__init__(message)


class BadSignatureError(AuthError):
    """Session token signature does not verify."""

    def __init__(self, message: str = "invalid session token signature"):
        super().__init__(message)


class MalformedTokenError(AuthError):
    """Session token cannot be parsed or lacks a required claim."""

    def __init__(self, message: str = "malformed session token"):
        super().__init__(message)


class ExpiredTokenError(AuthError):
    """Session token is past its expiry."""

    def __init__(self, message: str = "session token expired"):
        super().__init__(message)


class ConflictError(DomainError):
    """A provider credential is already bound to a different identity."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class RejectedError(DomainError):
    """The operation would break an identity invariant."""

    pass


class NotSupportedError(DomainError):
    """The operation is recognised but not offered."""

    pass


class StoreError(DomainError):
    """The identity store is unavailable or a write failed."""

    pass


class ConcurrentUpdateError(StoreError):
    """A conditional write lost against a concurrent writer."""

    def __init__(self, uid: str, expected_version: int):
        self.uid = uid
        self.expected_version = expected_version
        super().__init__(
            f"identity {uid} changed concurrently (expected version {expected_version})"
        )


class SessionSigningError(DomainError):
    """A session token could not be signed."""

    pass
