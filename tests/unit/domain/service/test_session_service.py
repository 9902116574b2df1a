"""Unit tests for SessionService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tokiwa.config import AuthSettings
from tokiwa.domain.error import (
    BadSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
    SessionSigningError,
)
from tokiwa.domain.service import SessionService
from tests.conftest import TEST_SECRET


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(AuthSettings(session_secret=TEST_SECRET))


def _flip_bit(segment: str, index: int, bit: int) -> str:
    chars = list(segment)
    chars[index] = chr(ord(chars[index]) ^ (1 << bit))
    return "".join(chars)


class TestMintAndValidate:
    """Tests for the mint/validate round trip."""

    def test_round_trip_returns_principal(self, session_service):
        token = session_service.mint("u1", "a@x.io")

        principal = session_service.validate(token)

        assert principal.uid == "u1"
        assert principal.email == "a@x.io"

    def test_token_valid_until_expiry(self, session_service):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=23)
        token = session_service.mint("u1", "a@x.io", issued_at=issued_at)

        assert session_service.validate(token).uid == "u1"

    def test_expired_token_is_rejected(self, session_service):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=25)
        token = session_service.mint("u1", "a@x.io", issued_at=issued_at)

        with pytest.raises(ExpiredTokenError):
            session_service.validate(token)

    def test_claims_are_integer_seconds(self, session_service):
        token = session_service.mint("u1", "a@x.io")

        claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])

        assert isinstance(claims["iat"], int)
        assert claims["exp"] - claims["iat"] == 24 * 3600


class TestTamperDetection:
    """Any change to the signature segment must be rejected."""

    def test_every_signature_bit_flip_is_rejected(self, session_service):
        token = session_service.mint("u1", "a@x.io")
        header, payload, signature = token.split(".")

        for index in range(len(signature)):
            for bit in range(7):
                tampered = f"{header}.{payload}.{_flip_bit(signature, index, bit)}"
                with pytest.raises(BadSignatureError):
                    session_service.validate(tampered)

    def test_altered_payload_is_rejected(self, session_service):
        token = session_service.mint("u1", "a@x.io")
        forged = jwt.encode(
            {"uid": "admin", "email": "a@x.io", "iat": 0, "exp": 2**31},
            TEST_SECRET + "x",
            algorithm="HS256",
        )
        header, _, signature = token.split(".")
        spliced = f"{header}.{forged.split('.')[1]}.{signature}"

        with pytest.raises(BadSignatureError):
            session_service.validate(spliced)

    def test_unsigned_token_is_rejected(self, session_service):
        token = jwt.encode(
            {"uid": "u1", "email": "a@x.io", "iat": 0, "exp": 2**31},
            None,
            algorithm="none",
        )

        with pytest.raises(BadSignatureError):
            session_service.validate(token)


class TestMalformedTokens:
    """Tests for structurally invalid tokens."""

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "...."])
    def test_garbage_is_malformed(self, session_service, token):
        with pytest.raises(MalformedTokenError):
            session_service.validate(token)

    def test_extra_segment_is_malformed(self, session_service):
        token = session_service.mint("u1", "a@x.io")

        with pytest.raises(MalformedTokenError):
            session_service.validate(f"{token}.extra")

    def test_dot_inside_signature_is_bad_signature(self, session_service):
        token = session_service.mint("u1", "a@x.io")
        header, payload, signature = token.split(".")
        damaged = signature[:10] + "." + signature[11:]

        with pytest.raises(BadSignatureError):
            session_service.validate(f"{header}.{payload}.{damaged}")

    def test_missing_claim_is_malformed(self, session_service):
        token = jwt.encode(
            {"uid": "u1", "iat": 0, "exp": 2**31}, TEST_SECRET, algorithm="HS256"
        )

        with pytest.raises(MalformedTokenError):
            session_service.validate(token)

    def test_empty_uid_is_malformed(self, session_service):
        token = jwt.encode(
            {"uid": "", "email": "a@x.io", "iat": 0, "exp": 2**31},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            session_service.validate(token)


class TestSigningKey:
    """Tests for secret configuration."""

    @pytest.mark.parametrize("secret", [None, "", "too-short"])
    def test_mint_requires_usable_secret(self, secret):
        service = SessionService(AuthSettings(session_secret=secret))

        with pytest.raises(SessionSigningError):
            service.mint("u1", "a@x.io")
