from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from networknote.config import settings
from networknote.errors import GenerationProxyFailure
from networknote.main import app
from networknote.routes.functions import get_ai_gateway


PROJECT_KEY = "anon-test-key"


@pytest.fixture
def gateway(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_ANON_KEY", PROJECT_KEY)
    fake = MagicMock()
    fake.linkedin_note = AsyncMock(return_value="Great to connect!")
    fake.cold_email = AsyncMock(return_value="Subject: Hi\n\nBody")
    fake.hr_email = AsyncMock(return_value="Dear Jane")
    app.dependency_overrides[get_ai_gateway] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


def test_linkedin_note_contract(gateway):
    response = TestClient(app, headers={"apikey": PROJECT_KEY}).post(
        "/functions/generate-linkedin-note",
        json={"intent": "network", "formData": {"currentJob": "Analyst"}},
    )

    assert response.status_code == 200
    assert response.json() == {"note": "Great to connect!"}
    gateway.linkedin_note.assert_awaited_once_with("network", {"currentJob": "Analyst"})


def test_email_contracts(gateway):
    client = TestClient(app, headers={"apikey": PROJECT_KEY})

    cold = client.post("/functions/generate-cold-email", json={"keyPoints": "x", "resume": "cv"})
    hr = client.post(
        "/functions/generate-hr-email",
        json={"hrName": "Jane", "hrPosition": "HR", "companyName": "Acme", "keyPoints": "x"},
    )

    assert cold.json() == {"email": "Subject: Hi\n\nBody"}
    assert hr.json() == {"email": "Dear Jane"}
    gateway.hr_email.assert_awaited_once_with("Jane", "HR", "Acme", "x")


def test_failure_is_500_with_error_field(gateway):
    gateway.cold_email.side_effect = GenerationProxyFailure("AI gateway error: rate limited")

    response = TestClient(app, headers={"apikey": PROJECT_KEY}).post(
        "/functions/generate-cold-email", json={"keyPoints": "x"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "AI gateway error: rate limited"}


def test_request_without_key_is_rejected(gateway):
    response = TestClient(app).post(
        "/functions/generate-hr-email",
        json={"hrName": "Jane", "companyName": "Acme", "keyPoints": "x"},
    )

    assert response.status_code == 401
    gateway.hr_email.assert_not_awaited()


def test_wrong_key_is_rejected(gateway):
    response = TestClient(app, headers={"apikey": "not-the-key"}).post(
        "/functions/generate-cold-email", json={"keyPoints": "x"}
    )

    assert response.status_code == 401
    gateway.cold_email.assert_not_awaited()


def test_project_key_as_bearer_is_accepted(gateway):
    response = TestClient(app).post(
        "/functions/generate-cold-email",
        json={"keyPoints": "x"},
        headers={"Authorization": f"Bearer {PROJECT_KEY}"},
    )

    assert response.status_code == 200


def test_signed_in_session_is_accepted(gateway, admin_headers):
    response = TestClient(app).post(
        "/functions/generate-linkedin-note",
        json={"intent": "network", "formData": {}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"note": "Great to connect!"}
