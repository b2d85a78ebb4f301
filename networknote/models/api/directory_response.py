from pydantic import BaseModel, Field

from networknote.models.domain.directory_domain import HRContact
from networknote.services.notifications import Notification


class CompanyListResponse(BaseModel):
    """Response for GET /companies."""

    letter: str
    companies: list[str]
    total_companies: int
    page: int
    total_pages: int
    has_more: bool = False
    demo_mode: bool = False
    notifications: list[Notification] = Field(default_factory=list)


class ContactPageResponse(BaseModel):
    """Response for GET /companies/{name}/contacts."""

    company: str
    contacts: list[HRContact]
    page: int
    total_pages: int
    total_contacts: int
    has_more: bool = False
    demo_mode: bool = False
    notifications: list[Notification] = Field(default_factory=list)
