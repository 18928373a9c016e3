"""HTTP tests for /auth and bearer token handling"""

import pytest

from booking_api.security_utils import issue_session_token
from booking_api.shared.validators import generate_object_id
from tests.conftest import DEFAULT_PASSWORD

GOOGLE_CLAIMS = {
    "sub": "1098765432",
    "email": "Jane.Doe@gmail.com",
    "name": "Jane Doe",
    "picture": "https://example.com/jane.png",
    "aud": "test-client-id.apps.googleusercontent.com",
    "iss": "https://accounts.google.com",
}


def register(client, **overrides):
    body = {"email": "new@example.com", "password": "s3cret", "name": "New User"}
    body.update(overrides)
    return client.post("/auth/register", json=body)


class TestRegister:
    def test_register_returns_token_and_user(self, client):
        response = register(client)

        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["email"] == "new@example.com"
        assert data["user"]["role"] == "client"
        assert "passwordHash" not in data["user"]

    def test_token_is_usable(self, client):
        data = register(client).json()

        response = client.get(
            f"/users/{data['user']['id']}", headers={"Authorization": f"Bearer {data['token']}"}
        )

        assert response.status_code == 200

    def test_duplicate_email_conflicts(self, client):
        first = register(client, name="First").json()

        response = register(client, email="NEW@example.com", name="Second")

        assert response.status_code == 409
        assert response.json() == {"error": True, "message": "Email already in use"}
        login = client.post("/auth/login", json={"email": "new@example.com", "password": "s3cret"})
        assert login.json()["user"]["id"] == first["user"]["id"]

    def test_invalid_email(self, client):
        assert register(client, email="not-an-email").status_code == 400

    def test_missing_password(self, client):
        response = client.post("/auth/register", json={"email": "x@example.com", "name": "X"})

        assert response.status_code == 400
        assert response.json()["error"] is True

    def test_elevated_role_needs_admin(self, client):
        response = register(client, role="provider")

        assert response.status_code == 403

    def test_client_cannot_grant_roles(self, client, client_headers):
        response = client.post(
            "/auth/register",
            json={"email": "p@example.com", "password": "pw", "name": "P", "role": "admin"},
            headers=client_headers,
        )

        assert response.status_code == 403

    def test_admin_can_grant_roles(self, client, admin_headers):
        response = client.post(
            "/auth/register",
            json={"email": "p@example.com", "password": "pw", "name": "P", "role": "provider"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "provider"


class TestLogin:
    def test_login(self, client, client_user):
        response = client.post(
            "/auth/login", json={"email": "client@example.com", "password": DEFAULT_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == client_user.id

    @pytest.mark.parametrize(
        "email,password",
        [
            ("client@example.com", "wrong-password"),
            ("nobody@example.com", DEFAULT_PASSWORD),
        ],
    )
    def test_failures_are_indistinguishable(self, client, client_user, email, password):
        response = client.post("/auth/login", json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.json() == {"error": True, "message": "Invalid email or password"}

    def test_google_user_cannot_use_password_login(self, client, google_verifier):
        google_verifier.claims_by_token["good"] = GOOGLE_CLAIMS
        client.post("/auth/google", json={"idToken": "good"})

        response = client.post("/auth/login", json={"email": "jane.doe@gmail.com", "password": ""})

        assert response.status_code == 401


class TestGoogleLogin:
    def test_first_sign_in_creates_client(self, client, google_verifier):
        google_verifier.claims_by_token["good"] = GOOGLE_CLAIMS

        response = client.post("/auth/google", json={"idToken": "good"})

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "jane.doe@gmail.com"
        assert user["name"] == "Jane Doe"
        assert user["role"] == "client"

    def test_second_sign_in_finds_same_user(self, client, google_verifier):
        google_verifier.claims_by_token["good"] = GOOGLE_CLAIMS

        first = client.post("/auth/google", json={"idToken": "good"}).json()
        second = client.post("/auth/google", json={"idToken": "good"}).json()

        assert first["user"]["id"] == second["user"]["id"]

    def test_invalid_token(self, client):
        response = client.post("/auth/google", json={"idToken": "forged"})

        assert response.status_code == 401

    def test_email_collision(self, client, google_verifier, make_user):
        make_user("jane.doe@gmail.com")
        google_verifier.claims_by_token["good"] = GOOGLE_CLAIMS

        response = client.post("/auth/google", json={"idToken": "good"})

        assert response.status_code == 409


class TestBearerTokens:
    def test_missing_token(self, client):
        response = client.get("/users")

        assert response.status_code == 401
        assert response.json() == {"error": True, "message": "Authentication required"}

    def test_token_for_deleted_user(self, client):
        token = issue_session_token(generate_object_id(), "admin")

        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_role_is_read_from_the_store(self, client, client_user):
        # A forged role claim does not grant admin rights
        token = issue_session_token(client_user.id, "admin")

        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_unknown_route_uses_error_shape(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] is True
