from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Feature(str, Enum):
    LINKEDIN_NOTE = "linkedin-note"
    COLD_EMAIL = "cold-email"
    HR_EMAIL = "hr-email"

    @property
    def endpoint(self) -> str:
        return f"generate-{self.value}"

    @property
    def result_field(self) -> str:
        return "note" if self is Feature.LINKEDIN_NOTE else "email"


class GenerationSource(str, Enum):
    PROXY = "proxy"
    FALLBACK = "fallback"


class LinkedInIntent(str, Enum):
    INTERVIEW = "interview"
    CONNECTIONS = "connections"
    NETWORK = "network"
    FOLLOWUP = "followup"


class IntentField(BaseModel):
    key: str
    label: str
    placeholder: str
    required: bool = True


_RESUME = IntentField(
    key="resume", label="Resume (optional)", placeholder="Paste resume...", required=False
)

INTENT_FIELDS: dict[LinkedInIntent, list[IntentField]] = {
    LinkedInIntent.INTERVIEW: [
        IntentField(key="jobFunction", label="Target Job Function", placeholder="e.g., Product Designer"),
        IntentField(key="company", label="Target Company", placeholder="e.g., Netflix"),
        _RESUME,
    ],
    LinkedInIntent.CONNECTIONS: [
        IntentField(key="role", label="Target Role", placeholder="e.g., Senior Engineer"),
        IntentField(key="company", label="Target Company", placeholder="e.g., Google"),
        IntentField(key="currentJob", label="Current Job", placeholder="e.g., Software Developer"),
        _RESUME,
    ],
    LinkedInIntent.NETWORK: [
        IntentField(key="currentJob", label="Current Job", placeholder="e.g., Data Analyst"),
        _RESUME,
    ],
    LinkedInIntent.FOLLOWUP: [
        IntentField(key="role", label="Target Role", placeholder="e.g., Product Manager"),
        IntentField(key="company", label="Target Company", placeholder="e.g., Meta"),
        IntentField(key="firstName", label="Connection First Name", placeholder="e.g., Sarah"),
        IntentField(key="jobTitle", label="Connection Job Title", placeholder="e.g., VP of Product"),
        _RESUME,
    ],
}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class LinkedInNoteRequest(BaseModel):
    intent: LinkedInIntent | None = None
    form_data: dict[str, str] = Field(default_factory=dict)

    def missing_fields(self) -> list[str]:
        if self.intent is None:
            return ["intent"]
        return [
            field.key
            for field in INTENT_FIELDS[self.intent]
            if field.required and _blank(self.form_data.get(field.key))
        ]

    def to_proxy_body(self) -> dict[str, Any]:
        return {"intent": self.intent.value if self.intent else "", "formData": self.form_data}


class ColdEmailRequest(BaseModel):
    key_points: str = ""
    resume: str = ""

    def missing_fields(self) -> list[str]:
        return ["key_points"] if _blank(self.key_points) else []

    def to_proxy_body(self) -> dict[str, Any]:
        return {"keyPoints": self.key_points, "resume": self.resume}


class HREmailRequest(BaseModel):
    hr_name: str = ""
    hr_position: str = ""
    company_name: str = ""
    key_points: str = ""

    def missing_fields(self) -> list[str]:
        required = ("hr_name", "company_name", "key_points")
        return [name for name in required if _blank(getattr(self, name))]

    def to_proxy_body(self) -> dict[str, Any]:
        return {
            "hrName": self.hr_name,
            "hrPosition": self.hr_position,
            "companyName": self.company_name,
            "keyPoints": self.key_points,
        }


OutreachRequest = LinkedInNoteRequest | ColdEmailRequest | HREmailRequest

class GeneratedText(BaseModel):
    feature: Feature
    text: str
    source: GenerationSource = GenerationSource.PROXY

    @property
    def character_count(self) -> int:
        return len(self.text)
