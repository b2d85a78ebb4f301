"""
Role resolution for dashboard sessions.

Pure functions of a single AuthMode value. Precedence:
    1. admin override
    2. manager override
    3. real Supabase session (admin check before manager check)
    4. no session -> redirect to login
"""

from networknote.config import settings
from networknote.models.domain.session_domain import (
    DEFAULT_TAB,
    AdminOverride,
    AuthMode,
    DashboardView,
    Identity,
    ManagerOverride,
    RealSession,
    Role,
    RolePolicy,
    RoleResolution,
    Unauthenticated,
)


def default_policy() -> RolePolicy:
    return RolePolicy(
        admin_emails=settings.admin_email_set(),
        manager_email=settings.MANAGER_SENTINEL_EMAIL.strip().lower(),
        default_manager_name=settings.DEFAULT_MANAGER_NAME,
    )


def is_admin(identity: Identity, policy: RolePolicy) -> bool:
    email = identity.email.strip().lower()
    return identity.metadata_role.lower() == "admin" or (
        bool(email) and email in policy.admin_emails
    )


def is_manager(identity: Identity, policy: RolePolicy) -> bool:
    email = identity.email.strip().lower()
    return identity.metadata_role.lower() == "manager" or (
        bool(email) and email == policy.manager_email.lower()
    )


def resolve_role(mode: AuthMode, policy: RolePolicy) -> Role | None:
    """Return the role for a session, or None when nobody is signed in."""
    if isinstance(mode, AdminOverride):
        return Role.ADMIN
    if isinstance(mode, ManagerOverride):
        return Role.MANAGER
    if isinstance(mode, RealSession):
        if is_admin(mode.identity, policy):
            return Role.ADMIN
        if is_manager(mode.identity, policy):
            return Role.MANAGER
        return Role.USER
    return None


def resolve_session(
    mode: AuthMode,
    policy: RolePolicy,
    last_tab: DashboardView | None = None,
) -> RoleResolution:
    """Resolve role and the view the dashboard should mount."""
    if isinstance(mode, Unauthenticated):
        return RoleResolution(role=None, view=None, redirect_to_login=True)

    role = resolve_role(mode, policy)
    if role in (Role.ADMIN, Role.MANAGER):
        return RoleResolution(role=role, view=DashboardView.ADMIN_CONSOLE)

    tab = last_tab if last_tab and last_tab != DashboardView.ADMIN_CONSOLE else DEFAULT_TAB
    return RoleResolution(role=role, view=tab)


def actor_name(mode: AuthMode, policy: RolePolicy) -> str:
    """Name written into `manager` fields for rows owned by this session."""
    if isinstance(mode, RealSession):
        return mode.identity.display_name
    if isinstance(mode, ManagerOverride):
        return policy.default_manager_name
    if isinstance(mode, AdminOverride):
        return "Admin"
    return ""
