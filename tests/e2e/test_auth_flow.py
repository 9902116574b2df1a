"""End-to-end tests for login, signup and session handling."""

from tests.e2e.helpers import bearer, password_session

REDIRECT_URI = "https://app.example/callback"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "environment": "test"}


class TestOAuthLogin:
    """End-to-end tests for POST /api/auth/{provider}."""

    def test_google_login_issues_session(self, client):
        # Act
        response = client.post(
            "/api/auth/google", json={"code": "abc", "redirect_uri": REDIRECT_URI}
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["uid"] == "google_mockgoogle123"
        assert data["email"] == "mock@gmail.com"
        assert data["sessionToken"]

    def test_repeat_login_returns_same_identity(self, client):
        first = client.post(
            "/api/auth/github", json={"code": "a", "redirect_uri": REDIRECT_URI}
        )
        second = client.post(
            "/api/auth/github", json={"code": "b", "redirect_uri": REDIRECT_URI}
        )

        assert first.json()["uid"] == second.json()["uid"] == "github_4242"

        providers = client.get(
            "/api/user-providers-detail", headers=bearer(second.json()["sessionToken"])
        )
        assert len(providers.json()["providers"]) == 1

    def test_rejected_code_is_unauthorized(self, client):
        response = client.post(
            "/api/auth/twitter", json={"code": "invalid", "redirect_uri": REDIRECT_URI}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Twitter sign-in failed"}

    def test_missing_code_is_bad_request(self, client):
        response = client.post("/api/auth/google", json={"redirect_uri": REDIRECT_URI})

        assert response.status_code == 400
        assert response.json()["error"].startswith("code:")

    def test_unknown_provider_is_bad_request(self, client):
        response = client.post(
            "/api/auth/myspace", json={"code": "abc", "redirect_uri": REDIRECT_URI}
        )

        assert response.status_code == 400

    def test_oauth_login_merges_into_password_identity(self, client):
        """Signing up, then using Google with the same email, keeps one identity."""
        # Arrange
        signup = client.post(
            "/api/signup", json={"email": "mock@gmail.com", "password": "Secret123"}
        )
        assert signup.status_code == 201

        # Act
        response = client.post(
            "/api/auth/google", json={"code": "abc", "redirect_uri": REDIRECT_URI}
        )

        # Assert
        assert response.json()["uid"] == signup.json()["uid"]
        providers = client.get(
            "/api/user-providers", headers=bearer(response.json()["sessionToken"])
        )
        assert providers.json() == {"providers": ["password", "google.com"]}


class TestOAuthLink:
    """End-to-end tests for the linkUID login path."""

    def test_link_with_matching_session(self, client):
        # Arrange
        session = password_session(client)

        # Act
        response = client.post(
            "/api/auth/google",
            json={
                "code": "abc",
                "redirect_uri": REDIRECT_URI,
                "linkUID": session["uid"],
            },
            headers=bearer(session["sessionToken"]),
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["uid"] == session["uid"]
        providers = client.get(
            "/api/user-providers", headers=bearer(session["sessionToken"])
        )
        assert providers.json()["providers"] == ["password", "google.com"]

    def test_link_without_session_is_unauthorized(self, client):
        response = client.post(
            "/api/auth/google",
            json={"code": "abc", "redirect_uri": REDIRECT_URI, "linkUID": "u1"},
        )

        assert response.status_code == 401

    def test_link_for_other_uid_is_unauthorized(self, client):
        session = password_session(client)

        response = client.post(
            "/api/auth/google",
            json={"code": "abc", "redirect_uri": REDIRECT_URI, "linkUID": "someone"},
            headers=bearer(session["sessionToken"]),
        )

        assert response.status_code == 401

    def test_link_of_credential_owned_elsewhere_conflicts(self, client):
        # Arrange
        client.post(
            "/api/auth/google", json={"code": "abc", "redirect_uri": REDIRECT_URI}
        )
        session = password_session(client)

        # Act
        response = client.post(
            "/api/auth/google",
            json={
                "code": "abc",
                "redirect_uri": REDIRECT_URI,
                "linkUID": session["uid"],
            },
            headers=bearer(session["sessionToken"]),
        )

        # Assert
        assert response.status_code == 409


class TestPasswordLogin:
    """End-to-end tests for POST /api/login and /api/signup."""

    def test_login(self, client):
        data = password_session(client)

        assert data["uid"] == "mockpassworduid"
        assert data["email"] == "mock@example.com"

    def test_wrong_password(self, client):
        response = client.post(
            "/api/login", json={"email": "mock@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "invalid email or password"}

    def test_unknown_email_looks_like_wrong_password(self, client):
        response = client.post(
            "/api/login", json={"email": "nobody@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "invalid email or password"}

    def test_malformed_email(self, client):
        response = client.post(
            "/api/login", json={"email": "not-an-email", "password": "x"}
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("email:")

    def test_signup_then_login(self, client):
        signup = client.post(
            "/api/signup", json={"email": "New@Example.com", "password": "Secret123"}
        )
        login = client.post(
            "/api/login", json={"email": "new@example.com", "password": "Secret123"}
        )

        assert signup.status_code == 201
        assert signup.json()["email"] == "new@example.com"
        assert login.status_code == 200
        assert login.json()["uid"] == signup.json()["uid"]

    def test_duplicate_signup_conflicts(self, client):
        response = client.post(
            "/api/signup", json={"email": "mock@example.com", "password": "Secret123"}
        )

        assert response.status_code == 409

    def test_signup_with_oauth_email_keeps_one_identity(self, client):
        # Arrange
        google = client.post(
            "/api/auth/google", json={"code": "abc", "redirect_uri": REDIRECT_URI}
        )

        # Act
        signup = client.post(
            "/api/signup", json={"email": "mock@gmail.com", "password": "Secret123"}
        )
        login = client.post(
            "/api/login", json={"email": "mock@gmail.com", "password": "Secret123"}
        )
        google_again = client.post(
            "/api/auth/google", json={"code": "def", "redirect_uri": REDIRECT_URI}
        )

        # Assert
        assert signup.status_code == 409
        assert login.status_code == 401
        assert google_again.json()["uid"] == google.json()["uid"]
        providers = client.get(
            "/api/user-providers", headers=bearer(google_again.json()["sessionToken"])
        )
        assert providers.json()["providers"] == ["google.com"]

    def test_weak_signup_password(self, client):
        response = client.post(
            "/api/signup", json={"email": "new@example.com", "password": "short"}
        )

        assert response.status_code == 400


class TestSessionValidation:
    """End-to-end tests for bearer handling on protected routes."""

    def test_missing_token(self, client):
        response = client.get("/api/user-providers")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        response = client.get("/api/user-providers", headers=bearer("garbage"))

        assert response.status_code == 401
        assert response.json() == {"error": "malformed session token"}

    def test_tampered_token(self, client):
        token = password_session(client)["sessionToken"]
        last = "A" if token[-1] != "A" else "B"

        response = client.get(
            "/api/user-providers", headers=bearer(token[:-1] + last)
        )

        assert response.status_code == 401
