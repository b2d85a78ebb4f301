from pydantic import BaseModel, Field

from networknote.models.domain.session_domain import DashboardView, Role
from networknote.services.notifications import Notification

LOGIN_PATH = "/auth"


class SessionResponse(BaseModel):
    """Response for GET /session."""

    role: Role | None = None
    view: DashboardView | None = None
    redirect_to: str | None = Field(None, description="Set when the caller must log in")
    override: bool = False
    display_name: str | None = None


class LoginResponse(SessionResponse):
    access_token: str
    expires_in: int | None = None
    notifications: list[Notification] = Field(default_factory=list)


class SignUpResponse(BaseModel):
    user_id: str
    email: str | None = None
    notifications: list[Notification] = Field(default_factory=list)


class AuthActionResponse(BaseModel):
    """Response for logout and password endpoints."""

    success: bool = True
    redirect_to: str | None = None
    notifications: list[Notification] = Field(default_factory=list)
