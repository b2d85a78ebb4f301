import pytest
from fastapi.testclient import TestClient

from networknote.auth.overrides import issue_override_token
from networknote.main import app
from networknote.models.domain.session_domain import AdminOverride, ManagerOverride
from networknote.services.supabase_auth_service import get_supabase_auth
from tests.fakes import make_identity


@pytest.fixture
def client(fake_auth):
    """App client with the auth collaborator replaced; no lifespan, so no DB pool."""
    app.dependency_overrides[get_supabase_auth] = lambda: fake_auth
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = issue_override_token(AdminOverride(email="admin@example.com"))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def manager_headers():
    token = issue_override_token(ManagerOverride(email="manager@example.com"))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def real_user(monkeypatch, fake_auth):
    """A Supabase-backed user whose JWT verification is stubbed out."""
    identity = make_identity("jo@example.com", full_name="Jo Doe")
    fake_auth.add_user(identity, "secret12", "tok-jo")
    monkeypatch.setattr(
        "networknote.auth.verify.verify_jwt",
        lambda token: {
            "sub": identity.user_id,
            "email": identity.email,
            "user_metadata": identity.user_metadata,
        },
    )
    return {"Authorization": "Bearer tok-jo"}
