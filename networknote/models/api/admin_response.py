from typing import Literal

from pydantic import BaseModel, Field

from networknote.models.domain.directory_domain import AdminUser, UserStats
from networknote.services.notifications import Notification


class AdminUsersResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[AdminUser]
    page: int
    rows_per_page: int
    total_pages: int
    total_users: int
    stats: UserStats
    managers: list[str]
    demo_mode: bool = False
    notifications: list[Notification] = Field(default_factory=list)


class CommandResponse(BaseModel):
    """Outcome of an admin mutation."""

    outcome: Literal["committed", "rejected"]
    users: list[AdminUser] = Field(default_factory=list)
    reason: str | None = None
    demo_mode: bool = False
    notifications: list[Notification] = Field(default_factory=list)


class ChangeStreamEvent(BaseModel):
    """One server-sent event on GET /admin/users/changes."""

    event_type: Literal["INSERT", "UPDATE", "DELETE"]
    users: list[AdminUser]
    stats: UserStats
    notifications: list[Notification] = Field(default_factory=list)
