"""
HR directory: companies by letter and paged HR contacts.

Both endpoints answer from the demo dataset when the database is down, with
demo_mode set in the response.
"""

from fastapi import APIRouter, Depends, Query

from networknote.auth.verify import SessionContext, signed_in
from networknote.config import settings
from networknote.models.api.directory_response import CompanyListResponse, ContactPageResponse
from networknote.repositories.hr_repository import HRRepository
from networknote.services.company_directory import CompanyDirectory
from networknote.services.pagination import paginate

router = APIRouter(prefix="/companies", tags=["hr-directory"])


def get_hr_repository() -> type[HRRepository]:
    return HRRepository


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    letter: str = Query("A", min_length=1, max_length=1),
    search: str = Query("", max_length=100),
    page: int = Query(1),
    _session: SessionContext = Depends(signed_in),
    repository: type[HRRepository] = Depends(get_hr_repository),
):
    directory = CompanyDirectory(repository)
    await directory.browse(letter)
    visible = directory.search(search)

    companies = paginate(visible, settings.COMPANIES_PAGE_SIZE, page)
    return CompanyListResponse(
        letter=directory.letter,
        companies=companies.items,
        total_companies=directory.total_companies or 0,
        page=companies.page_number,
        total_pages=companies.total_pages,
        has_more=companies.has_next,
        demo_mode=directory.demo_mode,
        notifications=directory.notifier.drain(),
    )


@router.get("/{company}/contacts", response_model=ContactPageResponse)
async def list_contacts(
    company: str,
    page: int = Query(1),
    _session: SessionContext = Depends(signed_in),
    repository: type[HRRepository] = Depends(get_hr_repository),
):
    directory = CompanyDirectory(repository)
    contacts = await directory.contacts_for(company, page)
    return ContactPageResponse(
        company=company,
        contacts=contacts.items,
        page=contacts.page_number,
        total_pages=contacts.total_pages,
        total_contacts=contacts.total_items,
        has_more=contacts.has_next,
        demo_mode=directory.demo_mode,
        notifications=directory.notifier.drain(),
    )
