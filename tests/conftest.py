"""
Shared pytest fixtures.

Each test gets a fresh application on an in-memory SQLite database; the
``db`` fixture shares that database so tests can seed records directly.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from booking_api.domain.service_catalog.repository import ServiceRepository  # noqa: E402
from booking_api.domain.users.repository import UserRepository  # noqa: E402
from booking_api.exceptions import UnauthorizedError  # noqa: E402
from booking_api.main import create_app  # noqa: E402
from booking_api.models import Provider  # noqa: E402
from booking_api.security_utils import hash_password, issue_session_token  # noqa: E402

DEFAULT_PASSWORD = "correct-horse-battery"


class FakeGoogleVerifier:
    """Stands in for Google: tokens registered in ``claims_by_token`` are valid."""

    def __init__(self):
        self.claims_by_token = {}

    async def verify(self, id_token):
        if id_token not in self.claims_by_token:
            raise UnauthorizedError("Invalid Google id token")
        return self.claims_by_token[id_token]


@pytest.fixture
def google_verifier():
    return FakeGoogleVerifier()


@pytest.fixture
def app(google_verifier):
    return create_app(database_url="sqlite://", google_verifier=google_verifier)


@pytest.fixture
def client(app):
    # The context manager runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(email, role="client", password=DEFAULT_PASSWORD, name="Test User"):
        return UserRepository.create_user(
            db,
            auth_provider="credentials",
            email=email,
            password_hash=hash_password(password),
            name=name,
            role=role,
        )

    return _make


@pytest.fixture
def headers_for():
    def _headers(user):
        return {"Authorization": f"Bearer {issue_session_token(user.id, user.role)}"}

    return _headers


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role="admin", name="Admin")


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)


@pytest.fixture
def client_user(make_user):
    return make_user("client@example.com", name="Client")


@pytest.fixture
def client_headers(client_user, headers_for):
    return headers_for(client_user)


@pytest.fixture
def haircut(db):
    """A 30 minute service"""
    return ServiceRepository.create_service(db, name="Haircut", duration_min=30, price=25.0)


@pytest.fixture
def provider(db):
    record = Provider(name="Dr. Smith", email="smith@example.com", specialties=["cuts"])
    db.add(record)
    db.commit()
    db.refresh(record)
    return record
