"""Request helpers shared by end-to-end tests."""

from fastapi.testclient import TestClient


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def password_session(client: TestClient) -> dict:
    """Log in as the mock backend's known account."""
    response = client.post(
        "/api/login", json={"email": "mock@example.com", "password": "MockPassw0rd"}
    )
    assert response.status_code == 200
    return response.json()
