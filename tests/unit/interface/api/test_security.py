"""Unit tests for bearer session authentication."""

import pytest

from tokiwa.config import AuthSettings
from tokiwa.domain.error import MalformedTokenError, MissingCredentialsError
from tokiwa.domain.service import SessionService
from tokiwa.interface.api.security import authenticate, bearer_token
from tests.conftest import TEST_SECRET


class TestBearerToken:
    """Tests for Authorization header parsing."""

    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert bearer_token("bearer  abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc"])
    def test_missing_or_foreign_credentials(self, header):
        with pytest.raises(MissingCredentialsError):
            bearer_token(header)


class TestAuthenticate:
    """Tests for authenticate helper."""

    def test_returns_principal_for_valid_session(self):
        service = SessionService(AuthSettings(session_secret=TEST_SECRET))
        token = service.mint("u1", "a@x.io")

        principal = authenticate(f"Bearer {token}", service)

        assert principal.uid == "u1"

    def test_invalid_token_propagates(self):
        service = SessionService(AuthSettings(session_secret=TEST_SECRET))

        with pytest.raises(MalformedTokenError):
            authenticate("Bearer not-a-token", service)
