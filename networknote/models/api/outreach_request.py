"""
Request bodies for generation routes.

Field names follow the browser client (camelCase); the same bodies are sent
on to the generate-* proxy endpoints.
"""

from pydantic import BaseModel, Field, field_validator

from networknote.models.domain.outreach_domain import (
    ColdEmailRequest,
    HREmailRequest,
    LinkedInIntent,
    LinkedInNoteRequest,
)


class LinkedInNoteBody(BaseModel):
    intent: str | None = None
    form_data: dict[str, str] = Field(default_factory=dict, alias="formData")

    model_config = {"populate_by_name": True}

    @field_validator("form_data", mode="before")
    @classmethod
    def _stringify(cls, value):
        if not isinstance(value, dict):
            return {}
        return {str(k): "" if v is None else str(v) for k, v in value.items()}

    def to_domain(self) -> LinkedInNoteRequest:
        # An unknown intent reads as missing
        known = {intent.value for intent in LinkedInIntent}
        intent = self.intent if self.intent in known else None
        return LinkedInNoteRequest(
            intent=LinkedInIntent(intent) if intent else None, form_data=self.form_data
        )


class ColdEmailBody(BaseModel):
    key_points: str = Field("", alias="keyPoints")
    resume: str = ""

    model_config = {"populate_by_name": True}

    def to_domain(self) -> ColdEmailRequest:
        return ColdEmailRequest(key_points=self.key_points, resume=self.resume)


class HREmailBody(BaseModel):
    hr_name: str = Field("", alias="hrName")
    hr_position: str = Field("", alias="hrPosition")
    company_name: str = Field("", alias="companyName")
    key_points: str = Field("", alias="keyPoints")
    hr_email: str | None = Field(None, alias="hrEmail", description="Recipient for mail links")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> HREmailRequest:
        return HREmailRequest(
            hr_name=self.hr_name,
            hr_position=self.hr_position,
            company_name=self.company_name,
            key_points=self.key_points,
        )
