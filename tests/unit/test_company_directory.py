"""
Tests for the letter-bucketed HR directory.
"""

import pytest

from networknote.errors import ValidationError
from networknote.models.domain.directory_domain import HRContact
from networknote.services.company_directory import CompanyDirectory, normalize_letter
from networknote.services.demo_data import MOCK_COMPANIES, MOCK_HR_DATA
from tests.fakes import FakeHRRepository

COMPANIES = ["Google", "Globex", "Gamma Labs", "Acme", "Apple", "Zeta"]


def make_contacts(n: int) -> list[HRContact]:
    return [
        HRContact(id=str(i), name=f"Contact {i}", email=f"c{i}@example.com", position="Recruiter")
        for i in range(n)
    ]


@pytest.fixture
def hr_repo():
    return FakeHRRepository(COMPANIES, make_contacts(45))


@pytest.fixture
def directory(hr_repo, notifier):
    return CompanyDirectory(repository=hr_repo, notifier=notifier, contacts_page_size=20)


@pytest.mark.asyncio
async def test_search_filters_without_refetch(directory, hr_repo):
    await directory.browse("G")
    assert directory.search("goo") == ["Google"]
    assert directory.search("xyz") == []
    assert hr_repo.letters_fetched == ["G"]


@pytest.mark.asyncio
async def test_total_counted_once(directory, hr_repo):
    first = await directory.browse("a")
    second = await directory.browse("Z")

    assert first.letter == "A"
    assert first.companies == ["Acme", "Apple"]
    assert second.companies == ["Zeta"]
    assert second.total_companies == len(COMPANIES)
    assert hr_repo.count_calls == 1


@pytest.mark.asyncio
async def test_search_term_survives_letter_change(directory):
    directory.search("ac")
    listing = await directory.browse("A")
    assert listing.companies == ["Acme"]


@pytest.mark.parametrize("letter", ["", "7", "AB", "é"])
def test_invalid_letter(letter):
    with pytest.raises(ValidationError):
        normalize_letter(letter)


@pytest.mark.asyncio
async def test_database_failure_switches_to_demo_data(directory, hr_repo, notifier):
    hr_repo.fail = True

    listing = await directory.browse("A")
    await directory.browse("G")

    assert listing.demo_mode
    assert listing.companies == ["Amazon", "Apple", "Adobe", "Airbnb"]
    assert listing.total_companies == len(MOCK_COMPANIES)
    assert directory.companies == ["Google"]
    assert len(notifier.pending) == 1
    assert notifier.pending[0].description == "Unable to connect to database. Showing demo data."


@pytest.mark.asyncio
async def test_contacts_paged(directory):
    page = await directory.contacts_for("Google", page_number=3)
    assert page.total_pages == 3
    assert [contact.id for contact in page.items] == [str(i) for i in range(40, 45)]

    clamped = await directory.contacts_for("Google", page_number=9)
    assert clamped.page_number == 3


@pytest.mark.asyncio
async def test_contacts_fall_back_to_demo(directory, hr_repo):
    hr_repo.fail = True
    page = await directory.contacts_for("Google")
    assert page.items == MOCK_HR_DATA
    assert directory.demo_mode
