from pydantic import BaseModel, Field

from networknote.models.domain.outreach_domain import Feature, GenerationSource
from networknote.services.notifications import Notification


class MailLinks(BaseModel):
    subject: str
    body: str
    mailto_url: str
    gmail_url: str


class GenerationResponse(BaseModel):
    """Response for POST /generate/*."""

    feature: Feature
    text: str
    source: GenerationSource
    character_count: int
    mail: MailLinks | None = None
    search_url: str | None = None
    notifications: list[Notification] = Field(default_factory=list)
