from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


class DashboardView(str, Enum):
    ADMIN_CONSOLE = "admin"
    LINKEDIN = "linkedin"
    COLD_EMAIL = "cold-email"
    HR_MAIL = "hr-mail"


DEFAULT_TAB = DashboardView.LINKEDIN
REGULAR_TABS = (DashboardView.LINKEDIN, DashboardView.COLD_EMAIL, DashboardView.HR_MAIL)


class AuthEvent(str, Enum):
    """Auth-state change notifications emitted by Supabase Auth."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class Identity(BaseModel):
    """Externally authenticated principal (read-only to this service)."""

    user_id: str | None = None
    email: str = ""
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def metadata_role(self) -> str:
        for source in (self.user_metadata, self.app_metadata):
            for key in ("role", "Role"):
                value = source.get(key)
                if value is not None:
                    return value if isinstance(value, str) else ""
        return ""

    @property
    def display_name(self) -> str:
        return self.user_metadata.get("full_name") or self.email

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Identity":
        return cls(
            user_id=claims.get("sub") or claims.get("id"),
            email=claims.get("email") or "",
            user_metadata=claims.get("user_metadata") or {},
            app_metadata=claims.get("app_metadata") or {},
        )


# AuthMode: exactly one of the four variants describes a browser session.


@dataclass(frozen=True)
class RealSession:
    identity: Identity


@dataclass(frozen=True)
class AdminOverride:
    email: str


@dataclass(frozen=True)
class ManagerOverride:
    email: str


@dataclass(frozen=True)
class Unauthenticated:
    reason: str | None = None


AuthMode = RealSession | AdminOverride | ManagerOverride | Unauthenticated


@dataclass(frozen=True)
class RolePolicy:
    """Configured inputs to role resolution."""

    admin_emails: frozenset[str] = frozenset()
    manager_email: str = "manager@example.com"
    default_manager_name: str = "Sarah Johnson"


@dataclass(frozen=True)
class RoleResolution:
    role: Role | None
    view: DashboardView | None
    redirect_to_login: bool = False
