"""Unit tests for error translation into HTTP responses."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from tokiwa.adapter.error import ProviderError
from tokiwa.domain.error import (
    ConcurrentUpdateError,
    ConflictError,
    DomainError,
    ExpiredTokenError,
    InvalidCredentialsError,
    NotFoundError,
    NotSupportedError,
    RateLimitedError,
    RejectedError,
    SessionSigningError,
    StoreError,
    ValidationError,
)
from tokiwa.interface.error import INTERNAL_ERROR_MESSAGE, register_exception_handlers

ERRORS: dict[str, DomainError] = {
    "validation": ValidationError("userName is required", field="userName"),
    "credentials": InvalidCredentialsError(),
    "expired": ExpiredTokenError(),
    "throttled": RateLimitedError(),
    "conflict": ConflictError("this Google account is linked to another user"),
    "missing": NotFoundError("Identity", "u1"),
    "rejected": RejectedError("cannot remove the last authentication method"),
    "unsupported": NotSupportedError("unsupported provider: google"),
    "store": StoreError("connection refused by db-host-7"),
    "race": ConcurrentUpdateError("u1", 3),
    "provider": ProviderError("google", "token exchange failed: 502"),
    "signing": SessionSigningError("session secret is not configured"),
}


class Body(BaseModel):
    email: str
    count: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/raise/{name}")
    async def raise_error(name: str):
        raise ERRORS[name]

    @app.post("/body")
    async def body(request: Body):
        return request

    return TestClient(app)


class TestDomainErrorStatus:
    """Tests for the status and body of each error family."""

    @pytest.mark.parametrize(
        "name,status_code",
        [
            ("validation", 400),
            ("credentials", 401),
            ("expired", 401),
            ("throttled", 429),
            ("conflict", 409),
            ("missing", 404),
            ("rejected", 400),
            ("unsupported", 501),
        ],
    )
    def test_client_errors_keep_message(self, client, name, status_code):
        response = client.get(f"/raise/{name}")

        assert response.status_code == status_code
        assert response.json() == {"error": str(ERRORS[name])}

    @pytest.mark.parametrize("name", ["store", "race", "provider", "signing"])
    def test_server_errors_are_sanitized(self, client, name):
        response = client.get(f"/raise/{name}")

        assert response.status_code == 500
        assert response.json() == {"error": INTERNAL_ERROR_MESSAGE}

    def test_unauthorized_carries_bearer_challenge(self, client):
        response = client.get("/raise/credentials")

        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestRequestValidation:
    """Tests for request schema failures."""

    def test_names_first_invalid_field(self, client):
        response = client.post("/body", json={"email": "a@x.io", "count": "many"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("count:")

    def test_missing_field(self, client):
        response = client.post("/body", json={"count": 1})

        assert response.status_code == 400
        assert response.json()["error"].startswith("email:")

    def test_invalid_json(self, client):
        response = client.post(
            "/body", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "request body is not valid JSON"}

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
