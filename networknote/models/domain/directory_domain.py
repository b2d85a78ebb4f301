from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

UNASSIGNED = "Unassigned"

BillingStatus = Literal["paid", "unpaid"]


class HRContact(BaseModel):
    """HR contact at a company (hr_details row)."""

    id: str
    name: str
    email: str
    position: str = ""


class CompanyListing(BaseModel):
    letter: str
    companies: list[str]
    total_companies: int
    demo_mode: bool = False


class AdminUser(BaseModel):
    """Managed user account (user_accounts row)."""

    id: str
    name: str = "N/A"
    email: str = "N/A"
    role: str = "user"
    manager: str = UNASSIGNED
    status: BillingStatus = "unpaid"
    created_at: str = ""
    last_login: str = "Never"
    version: int = 0

    @staticmethod
    def status_from(value: Any) -> BillingStatus:
        return "paid" if isinstance(value, str) and value.lower() == "paid" else "unpaid"

    @classmethod
    def from_row(cls, row: dict[str, Any], index: int = 0) -> "AdminUser":
        created_at = row.get("created_at")
        last_sign_in = row.get("last_sign_in_at")
        updated_at = row.get("updated_at")
        return cls(
            id=str(row["id"]) if row.get("id") is not None else str(index),
            name=row.get("full_name") or "N/A",
            email=row.get("email") or "N/A",
            role=row.get("role") or "user",
            manager=row.get("manager") or UNASSIGNED,
            status=cls.status_from(row.get("status")),
            created_at=created_at.date().isoformat() if isinstance(created_at, datetime) else "",
            last_login=(
                last_sign_in.strftime("%b %d, %Y, %I:%M %p")
                if isinstance(last_sign_in, datetime)
                else "Never"
            ),
            version=version_from_timestamp(updated_at),
        )


def version_from_timestamp(value: Any) -> int:
    """Monotonic record version: microseconds since epoch, 0 when unknown."""
    if isinstance(value, datetime):
        return int(value.timestamp() * 1_000_000)
    return 0


class UserStats(BaseModel):
    total: int
    paid: int
    unpaid: int


class NewUserDraft(BaseModel):
    name: str = ""
    email: str = ""
    role: str = "user"
    manager: str = "Sarah Johnson"
    status: BillingStatus = "unpaid"


class ChangeEventType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeEvent(BaseModel):
    event_type: ChangeEventType
    record: dict[str, Any] = Field(default_factory=dict)
    old_record: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class Committed(Generic[T]):
    """Mutation persisted; `value` is what the list now holds."""

    value: T


@dataclass(frozen=True)
class Rejected:
    """Mutation refused or failed; the list is unchanged."""

    reason: str
    error: Exception | None = None


CommandResult = Committed | Rejected
