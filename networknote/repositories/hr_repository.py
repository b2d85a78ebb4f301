"""
Read access to the `hr_details` table.
"""

from networknote.db.helpers import fetch_all, fetch_val, with_db_retry
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.directory_domain import HRContact

logger = get_logger(__name__)


class HRRepository:
    """Company and HR contact lookups."""

    @classmethod
    @with_db_retry()
    async def count_companies(cls) -> int:
        query = "SELECT COUNT(DISTINCT company) FROM hr_details"
        return await fetch_val(query) or 0

    @classmethod
    @with_db_retry()
    async def companies_starting_with(cls, letter: str) -> list[str]:
        query = """
            SELECT company
            FROM hr_details
            WHERE company ILIKE %s
            ORDER BY company
        """
        rows = await fetch_all(query, (f"{letter}%",))

        # dict.fromkeys keeps first-seen order
        companies = list(dict.fromkeys(row["company"] for row in rows if row.get("company")))
        logger.debug("Companies fetched", letter=letter, company_count=len(companies))
        return companies

    @classmethod
    @with_db_retry()
    async def contacts_for_company(cls, company: str) -> list[HRContact]:
        query = """
            SELECT id, name, email, designation
            FROM hr_details
            WHERE company = %s
        """
        rows = await fetch_all(query, (company,))
        return [
            HRContact(
                id=str(row["id"]),
                name=row.get("name") or "",
                email=row.get("email") or "",
                position=row.get("designation") or "",
            )
            for row in rows
        ]
