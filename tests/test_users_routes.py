"""HTTP tests for /users"""

from booking_api.shared.validators import generate_object_id


class TestListAndRead:
    def test_list_is_admin_only(self, client, admin_headers, client_headers, client_user):
        assert client.get("/users", headers=client_headers).status_code == 403

        response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        assert {u["email"] for u in response.json()} == {"admin@example.com", "client@example.com"}

    def test_read_self(self, client, client_user, client_headers):
        response = client.get(f"/users/{client_user.id}", headers=client_headers)

        assert response.status_code == 200
        assert response.json()["authProvider"] == "credentials"

    def test_read_other_is_forbidden(self, client, client_headers, admin):
        response = client.get(f"/users/{admin.id}", headers=client_headers)

        assert response.status_code == 403
        assert response.json() == {"error": True, "message": "Forbidden: insufficient privileges"}

    def test_admin_reads_anyone(self, client, admin_headers, client_user):
        assert client.get(f"/users/{client_user.id}", headers=admin_headers).status_code == 200

    def test_invalid_id(self, client, admin_headers):
        assert client.get("/users/123", headers=admin_headers).status_code == 400

    def test_unknown_id(self, client, admin_headers):
        response = client.get(f"/users/{generate_object_id()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestCreate:
    def test_admin_creates_google_user(self, client, admin_headers):
        response = client.post(
            "/users",
            json={
                "authProvider": "google",
                "authId": "g-123",
                "email": "g@example.com",
                "name": "G",
                "role": "provider",
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["role"] == "provider"
        assert response.json()["authId"] == "g-123"

    def test_google_user_needs_auth_id(self, client, admin_headers):
        response = client.post(
            "/users",
            json={"authProvider": "google", "email": "g@example.com", "name": "G"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_client_cannot_create(self, client, client_headers):
        response = client.post(
            "/users",
            json={"authProvider": "credentials", "email": "x@example.com", "name": "X", "password": "pw"},
            headers=client_headers,
        )

        assert response.status_code == 403

    def test_duplicate_email(self, client, admin_headers, client_user):
        response = client.post(
            "/users",
            json={"authProvider": "credentials", "email": "client@example.com", "name": "X"},
            headers=admin_headers,
        )

        assert response.status_code == 409


class TestUpdate:
    def test_self_update(self, client, client_user, client_headers):
        response = client.put(
            f"/users/{client_user.id}", json={"name": "Renamed", "phone": "555-0100"}, headers=client_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["phone"] == "555-0100"

    def test_role_change_by_non_admin_is_ignored(self, client, client_user, client_headers):
        response = client.put(
            f"/users/{client_user.id}", json={"name": "Still Client", "role": "admin"}, headers=client_headers
        )

        assert response.status_code == 200
        assert response.json()["role"] == "client"
        assert response.json()["name"] == "Still Client"

    def test_only_ignored_fields_returns_user_unchanged(self, client, client_user, client_headers):
        before = client.get(f"/users/{client_user.id}", headers=client_headers).json()

        response = client.put(
            f"/users/{client_user.id}", json={"role": "admin", "authId": "x"}, headers=client_headers
        )

        assert response.status_code == 200
        assert response.json() == before
        assert response.json()["role"] == "client"

    def test_empty_body(self, client, client_user, client_headers):
        response = client.put(f"/users/{client_user.id}", json={}, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    def test_admin_changes_role(self, client, client_user, admin_headers, client_headers):
        response = client.put(f"/users/{client_user.id}", json={"role": "provider"}, headers=admin_headers)

        assert response.json()["role"] == "provider"
        # Existing tokens pick up the new role
        assert client.get("/users", headers=client_headers).status_code == 403

    def test_update_other_is_forbidden(self, client, admin, client_headers):
        response = client.put(f"/users/{admin.id}", json={"name": "Hacked"}, headers=client_headers)

        assert response.status_code == 403

    def test_email_taken(self, client, client_user, client_headers, admin):
        response = client.put(
            f"/users/{client_user.id}", json={"email": "admin@example.com"}, headers=client_headers
        )

        assert response.status_code == 409

    def test_null_name_rejected(self, client, client_user, client_headers):
        response = client.put(f"/users/{client_user.id}", json={"name": None}, headers=client_headers)

        assert response.status_code == 400

    def test_null_phone_clears(self, client, client_user, client_headers):
        client.put(f"/users/{client_user.id}", json={"phone": "555-0100"}, headers=client_headers)

        response = client.put(f"/users/{client_user.id}", json={"phone": None}, headers=client_headers)

        assert response.json()["phone"] is None

    def test_password_change(self, client, client_user, client_headers):
        client.put(f"/users/{client_user.id}", json={"password": "brand-new"}, headers=client_headers)

        old = client.post("/auth/login", json={"email": "client@example.com", "password": "correct-horse-battery"})
        new = client.post("/auth/login", json={"email": "client@example.com", "password": "brand-new"})

        assert old.status_code == 401
        assert new.status_code == 200


class TestDelete:
    def test_delete_self(self, client, client_user, client_headers, admin_headers):
        response = client.delete(f"/users/{client_user.id}", headers=client_headers)

        assert response.status_code == 204
        assert client.get(f"/users/{client_user.id}", headers=admin_headers).status_code == 404
        # The deleted user's token no longer authenticates
        assert client.get(f"/users/{client_user.id}", headers=client_headers).status_code == 401

    def test_delete_other_is_forbidden(self, client, admin, client_headers):
        assert client.delete(f"/users/{admin.id}", headers=client_headers).status_code == 403

    def test_admin_deletes_unknown(self, client, admin_headers):
        assert client.delete(f"/users/{generate_object_id()}", headers=admin_headers).status_code == 404
