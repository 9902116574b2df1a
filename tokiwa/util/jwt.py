"""JWT token utilities."""

import base64
import binascii
import json
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from tokiwa.config import MIN_SESSION_SECRET_LENGTH, AuthSettings

REQUIRED_CLAIMS = ["uid", "email", "iat", "exp"]

# Unpadded base64url length of each HMAC digest
SIGNATURE_SEGMENT_LENGTHS = {"HS256": 43, "HS384": 64, "HS512": 86}


class TokenPayload(BaseModel):
    """Session token payload."""

    uid: str
    email: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class SigningKeyError(JWTError):
    """No usable signing key is configured."""

    pass


class TokenFormatError(JWTError):
    """Token is not a well-formed JWS or lacks required claims."""

    pass


class TokenSignatureError(JWTError):
    """Token signature does not verify."""

    pass


class TokenExpiredError(JWTError):
    """Token is past its expiry."""

    pass


def _signing_key(settings: AuthSettings) -> bytes:
    secret = settings.session_secret
    if not secret:
        raise SigningKeyError("session secret is not configured")
    key = secret.encode("utf-8")
    if len(key) < MIN_SESSION_SECRET_LENGTH:
        raise SigningKeyError(
            f"session secret must be at least {MIN_SESSION_SECRET_LENGTH} bytes"
        )
    return key


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _check_structure(token: str, algorithm: str) -> None:
    """Reject tokens PyJWT would otherwise parse leniently.

    The base64 decoder ignores stray characters and unused trailing bits, so a
    signature segment is only accepted in its canonical encoding.

    A dot inside a signature segment of the digest's exact length is a
    damaged signature. Any other extra dot means too many segments.
    """
    parts = token.split(".", 2)
    if len(parts) != 3:
        raise TokenFormatError("token must have three segments")
    header_segment, payload_segment, signature_segment = parts
    expected_length = SIGNATURE_SEGMENT_LENGTHS.get(algorithm)
    if "." in signature_segment and len(signature_segment) != expected_length:
        raise TokenFormatError("token must have three segments")

    try:
        header = json.loads(_b64url_decode(header_segment))
        payload = json.loads(_b64url_decode(payload_segment))
    except (ValueError, binascii.Error) as e:
        raise TokenFormatError("token header or payload is not valid JSON") from e
    if not isinstance(header, dict) or not isinstance(payload, dict):
        raise TokenFormatError("token header and payload must be objects")

    if header.get("alg") != algorithm:
        raise TokenSignatureError("unexpected signing algorithm")

    try:
        signature = _b64url_decode(signature_segment)
    except (ValueError, binascii.Error) as e:
        raise TokenSignatureError("signature is not valid base64url") from e
    canonical = base64.urlsafe_b64encode(signature).rstrip(b"=").decode("ascii")
    if canonical != signature_segment:
        raise TokenSignatureError("signature is not canonically encoded")


def create_token(
    uid: str,
    email: str,
    settings: AuthSettings,
    issued_at: datetime | None = None,
) -> str:
    """Create a session token.

    Args:
        uid: Identity uid
        email: Email the session was established with
        settings: Authentication settings
        issued_at: Issue time, defaults to now

    Returns:
        Encoded JWT token

    Raises:
        SigningKeyError: If no usable secret is configured
    """
    key = _signing_key(settings)
    issued_at = issued_at or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(hours=settings.session_expiry_hours)

    payload = {
        "uid": uid,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expiry.timestamp()),
    }

    try:
        return jwt.encode(payload, key, algorithm=settings.session_algorithm)
    except (NotImplementedError, jwt.PyJWTError) as e:
        raise SigningKeyError(f"failed to sign session token: {e}") from e


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        SigningKeyError: If no usable secret is configured
        TokenFormatError: If the token or its claims are malformed
        TokenSignatureError: If the signature does not verify
        TokenExpiredError: If the token has expired
    """
    key = _signing_key(settings)
    _check_structure(token, settings.session_algorithm)

    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[settings.session_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
        raise TokenSignatureError("Invalid token signature") from e
    except jwt.InvalidTokenError as e:
        raise TokenFormatError(f"Invalid token: {e}") from e

    uid, email = payload.get("uid"), payload.get("email")
    if not isinstance(uid, str) or not uid or not isinstance(email, str) or not email:
        raise TokenFormatError("uid and email claims must be non-empty strings")

    return TokenPayload(**payload)
