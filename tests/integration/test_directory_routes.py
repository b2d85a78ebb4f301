import pytest

from networknote.main import app
from networknote.models.domain.directory_domain import HRContact
from networknote.routes.hr_directory import get_hr_repository
from tests.fakes import FakeHRRepository


@pytest.fixture
def hr_repo(client):
    contacts = [
        HRContact(id=str(i), name=f"Contact {i}", email=f"c{i}@example.com", position="Recruiter")
        for i in range(25)
    ]
    repo = FakeHRRepository(["Google", "Globex", "Acme"], contacts)
    app.dependency_overrides[get_hr_repository] = lambda: repo
    return repo


def test_companies_by_letter_and_search(client, hr_repo, real_user):
    response = client.get("/companies", params={"letter": "g", "search": "goo"}, headers=real_user)

    assert response.status_code == 200
    data = response.json()
    assert data["letter"] == "G"
    assert data["companies"] == ["Google"]
    assert data["total_companies"] == 3
    assert data["demo_mode"] is False


def test_invalid_letter_is_422(client, hr_repo, real_user):
    response = client.get("/companies", params={"letter": "7"}, headers=real_user)
    assert response.status_code == 422


def test_demo_fallback_when_database_down(client, hr_repo, real_user):
    hr_repo.fail = True

    response = client.get("/companies", params={"letter": "A"}, headers=real_user)

    data = response.json()
    assert response.status_code == 200
    assert data["demo_mode"] is True
    assert data["companies"] == ["Amazon", "Apple", "Adobe", "Airbnb"]
    assert data["notifications"][0]["variant"] == "destructive"


def test_contacts_paged(client, hr_repo, real_user):
    response = client.get("/companies/Google/contacts", params={"page": 2}, headers=real_user)

    data = response.json()
    assert data["page"] == 2
    assert data["total_contacts"] == 25
    assert [contact["id"] for contact in data["contacts"]] == [str(i) for i in range(20, 25)]
    assert data["has_more"] is False

    first = client.get("/companies/Google/contacts", headers=real_user).json()
    assert first["has_more"] is True


def test_directory_requires_sign_in(client, hr_repo):
    assert client.get("/companies").status_code == 401
