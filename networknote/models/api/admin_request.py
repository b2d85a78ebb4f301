from pydantic import BaseModel, Field

from networknote.models.domain.directory_domain import BillingStatus


class CreateUserRequest(BaseModel):
    """Request body for POST /admin/users."""

    name: str = ""
    email: str = ""
    role: str = "user"
    manager: str = "Sarah Johnson"
    status: BillingStatus = "unpaid"


class AssignOwnerRequest(BaseModel):
    user_ids: list[str] = Field(default_factory=list)
    owner: str = ""


class ManagerChangeRequest(BaseModel):
    manager: str


class StatusChangeRequest(BaseModel):
    status: BillingStatus
