"""
Resolve the caller's role and landing view.

An invalid or expired token is not an error here: it resolves to
Unauthenticated with a redirect to the login page.
"""

from fastapi import APIRouter, Depends, Query

from networknote.auth.verify import bearer_token, resolve_auth_mode
from networknote.errors import AuthFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.api.auth_response import LOGIN_PATH, SessionResponse
from networknote.models.domain.session_domain import (
    AdminOverride,
    DashboardView,
    ManagerOverride,
    Unauthenticated,
)
from networknote.services.dashboard_session import DashboardSession
from networknote.services.role_resolver import actor_name, default_policy
from networknote.services.supabase_auth_service import SupabaseAuthService, get_supabase_auth

router = APIRouter(tags=["session"])
logger = get_logger(__name__)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    last_tab: DashboardView | None = Query(None, description="Last tab the client showed"),
    token: str | None = Depends(bearer_token),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    try:
        mode = resolve_auth_mode(token)
    except AuthFailure as e:
        logger.info("Session token rejected", error=e.message)
        mode = Unauthenticated(reason="invalid_token")

    override = mode if isinstance(mode, (AdminOverride, ManagerOverride)) else None
    policy = default_policy()
    live_token = None if isinstance(mode, Unauthenticated) else token
    session = DashboardSession(auth_service, policy, mode=override, access_token=live_token)
    if last_tab is not None:
        session.active_tab = last_tab

    resolution = await session.initialize()
    if resolution.redirect_to_login:
        return SessionResponse(redirect_to=LOGIN_PATH)

    return SessionResponse(
        role=resolution.role,
        view=resolution.view,
        override=session.override_active,
        display_name=actor_name(session.mode, policy),
    )
