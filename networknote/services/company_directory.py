"""
HR directory: companies bucketed by first letter, with a local search filter
and paged contacts per company.

Search never fetches; only a letter change does. When the database is
unreachable the directory switches to the fixed demo dataset.
"""

import string

from networknote.config import settings
from networknote.errors import PersistenceFailure, ValidationError
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.directory_domain import CompanyListing, HRContact
from networknote.repositories.hr_repository import HRRepository
from networknote.services.demo_data import MOCK_COMPANIES, MOCK_HR_DATA, demo_companies
from networknote.services.notifications import NotificationChannel
from networknote.services.pagination import Page, PageCursor, filter_by_term

logger = get_logger(__name__)

ALPHABET = list(string.ascii_uppercase)


def normalize_letter(letter: str) -> str:
    value = (letter or "").strip().upper()
    if value not in ALPHABET:
        raise ValidationError(
            f"'{letter}' is not a letter A-Z", title="Invalid letter", missing_fields=["letter"]
        )
    return value


class CompanyDirectory:
    def __init__(
        self,
        repository: type[HRRepository] = HRRepository,
        notifier: NotificationChannel | None = None,
        contacts_page_size: int | None = None,
    ):
        self.repository = repository
        self.notifier = notifier or NotificationChannel()
        self.letter = "A"
        self.companies: list[str] = []
        self.total_companies: int | None = None
        self.search_term = ""
        self.demo_mode = False
        self.contacts_cursor = PageCursor(contacts_page_size or settings.HR_CONTACTS_PAGE_SIZE)
        self._contacts_company: str | None = None
        self._contacts: list[HRContact] = []

    async def browse(self, letter: str) -> CompanyListing:
        """Fetch the bucket for a letter. The overall total is fetched only once."""
        letter = normalize_letter(letter)
        if letter != self.letter:
            self.contacts_cursor.reset()
        self.letter = letter

        try:
            if self.total_companies is None:
                self.total_companies = await self.repository.count_companies()
            self.companies = await self.repository.companies_starting_with(letter)
            self.demo_mode = False
        except PersistenceFailure as e:
            logger.warning("Company fetch failed, using demo data", letter=letter, error=e.message)
            self.companies = demo_companies(letter)
            self.total_companies = len(MOCK_COMPANIES)
            self._enter_demo_mode(e)

        logger.debug(
            "Company bucket loaded",
            letter=letter,
            company_count=len(self.companies),
            demo_mode=self.demo_mode,
        )
        return self.listing()

    def search(self, term: str) -> list[str]:
        self.search_term = term or ""
        return self.visible_companies()

    def visible_companies(self) -> list[str]:
        return filter_by_term(self.companies, self.search_term, [lambda company: company])

    def listing(self) -> CompanyListing:
        return CompanyListing(
            letter=self.letter,
            companies=self.visible_companies(),
            total_companies=self.total_companies or 0,
            demo_mode=self.demo_mode,
        )

    async def contacts_for(self, company: str, page_number: int = 1) -> Page[HRContact]:
        if company != self._contacts_company:
            try:
                self._contacts = await self.repository.contacts_for_company(company)
                self.demo_mode = False
            except PersistenceFailure as e:
                logger.warning("HR contact fetch failed, using demo data", company=company, error=e.message)
                self._contacts = list(MOCK_HR_DATA)
                self._enter_demo_mode(e)
            self._contacts_company = company
            self.contacts_cursor.reset()

        self.contacts_cursor.go_to(page_number, len(self._contacts))
        return self.contacts_cursor.page(self._contacts)

    def _enter_demo_mode(self, error: PersistenceFailure) -> None:
        if not self.demo_mode:
            self.notifier.notify(
                error.title,
                "Unable to connect to database. Showing demo data.",
                "destructive",
            )
        self.demo_mode = True
