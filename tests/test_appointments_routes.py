"""HTTP tests for /appointments"""

import pytest

from booking_api.shared.validators import generate_object_id

START = "2025-01-15T10:00:00.000Z"


@pytest.fixture
def payload(client_user, provider, haircut):
    return {
        "clientId": client_user.id,
        "providerId": provider.id,
        "serviceId": haircut.id,
        "startAt": START,
    }


class TestBookingFlow:
    def test_book_then_confirm(self, client, client_headers, payload):
        """Book without endAt, then confirm: times are kept and updatedAt advances"""
        response = client.post("/appointments", json=payload, headers=client_headers)

        assert response.status_code == 201
        created = response.json()
        assert created["startAt"].startswith("2025-01-15T10:00:00")
        assert created["endAt"].startswith("2025-01-15T10:30:00")
        assert created["status"] == "scheduled"

        response = client.put(
            f"/appointments/{created['id']}", json={"status": "confirmed"}, headers=client_headers
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "confirmed"
        assert updated["startAt"] == created["startAt"]
        assert updated["endAt"] == created["endAt"]
        assert updated["updatedAt"] > created["updatedAt"]

    def test_get_and_list(self, client, client_headers, payload):
        created = client.post("/appointments", json=payload, headers=client_headers).json()

        fetched = client.get(f"/appointments/{created['id']}", headers=client_headers)
        listed = client.get("/appointments", headers=client_headers)

        assert fetched.status_code == 200
        assert fetched.json() == created
        assert [a["id"] for a in listed.json()] == [created["id"]]

    def test_any_authenticated_user_may_access(self, client, client_headers, payload, make_user, headers_for):
        created = client.post("/appointments", json=payload, headers=client_headers).json()
        stranger = make_user("stranger@example.com")

        response = client.get(f"/appointments/{created['id']}", headers=headers_for(stranger))

        assert response.status_code == 200

    def test_delete_then_not_found(self, client, client_headers, payload):
        created = client.post("/appointments", json=payload, headers=client_headers).json()

        first = client.delete(f"/appointments/{created['id']}", headers=client_headers)
        second = client.delete(f"/appointments/{created['id']}", headers=client_headers)

        assert first.status_code == 204
        assert second.status_code == 404
        assert second.json() == {"error": True, "message": "Appointment not found"}


class TestAppointmentErrors:
    def test_requires_authentication(self, client, payload):
        assert client.get("/appointments").status_code == 401
        assert client.post("/appointments", json=payload).status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/appointments", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
        assert response.json()["error"] is True

    def test_invalid_path_id(self, client, client_headers):
        response = client.get("/appointments/not-an-id", headers=client_headers)

        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "Invalid ID"}

    def test_unknown_id(self, client, client_headers):
        response = client.get(f"/appointments/{generate_object_id()}", headers=client_headers)

        assert response.status_code == 404

    def test_missing_start(self, client, client_headers, payload):
        del payload["startAt"]

        response = client.post("/appointments", json=payload, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "startAt is required"

    def test_invalid_status_on_update(self, client, client_headers, payload):
        created = client.post("/appointments", json=payload, headers=client_headers).json()

        response = client.put(
            f"/appointments/{created['id']}", json={"status": "finished"}, headers=client_headers
        )

        assert response.status_code == 400
        assert client.get(f"/appointments/{created['id']}", headers=client_headers).json() == created

    def test_empty_update(self, client, client_headers, payload):
        created = client.post("/appointments", json=payload, headers=client_headers).json()

        response = client.put(f"/appointments/{created['id']}", json={}, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    def test_derived_end_out_of_range(self, client, client_headers, payload):
        payload["startAt"] = "9999-12-31T23:59:00Z"

        response = client.post("/appointments", json=payload, headers=client_headers)

        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "endAt is out of range"}

    def test_offset_out_of_range(self, client, client_headers, payload):
        payload["startAt"] = "0001-01-01T00:30:00+01:00"

        response = client.post("/appointments", json=payload, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "startAt is out of range"

    def test_rescheduling_past_range_on_update(self, client, client_headers, payload):
        created = client.post("/appointments", json=payload, headers=client_headers).json()

        response = client.put(
            f"/appointments/{created['id']}", json={"startAt": "9999-12-31T23:59:00Z"}, headers=client_headers
        )

        assert response.status_code == 400
        assert client.get(f"/appointments/{created['id']}", headers=client_headers).json() == created
