"""
auth.py
-------
Purpose:
    Login, sign-up, logout and password recovery.

    - Override credentials (demo admin/manager) never reach Supabase; the
      response carries a locally signed override token instead.
    - Every other login is exchanged with Supabase Auth.
"""

from fastapi import APIRouter, Depends, status

from networknote.auth.overrides import issue_override_token
from networknote.auth.verify import bearer_token, resolve_auth_mode
from networknote.config import settings
from networknote.errors import AuthFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.api.auth_request import (
    LoginRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    SignUpRequest,
)
from networknote.models.api.auth_response import (
    LOGIN_PATH,
    AuthActionResponse,
    LoginResponse,
    SignUpResponse,
)
from networknote.models.domain.session_domain import AdminOverride, ManagerOverride, Unauthenticated
from networknote.services.dashboard_session import DashboardSession
from networknote.services.role_resolver import actor_name, default_policy
from networknote.services.supabase_auth_service import SupabaseAuthService, get_supabase_auth

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


def _public_url(path: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{path}"


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest, auth_service: SupabaseAuthService = Depends(get_supabase_auth)
):
    policy = default_policy()
    session = DashboardSession(auth_service, policy)
    resolution = await session.login(body.email, body.password)

    if isinstance(session.mode, (AdminOverride, ManagerOverride)):
        access_token = issue_override_token(session.mode)
        expires_in = settings.OVERRIDE_TOKEN_TTL_SECONDS
    else:
        access_token = session.access_token
        expires_in = None

    logger.info("Login succeeded", role=resolution.role.value, override=session.override_active)
    return LoginResponse(
        role=resolution.role,
        view=resolution.view,
        override=session.override_active,
        display_name=actor_name(session.mode, policy),
        access_token=access_token,
        expires_in=expires_in,
        notifications=session.notifier.drain(),
    )


@router.post("/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignUpRequest, auth_service: SupabaseAuthService = Depends(get_supabase_auth)
):
    session = DashboardSession(auth_service, default_policy())
    identity = await session.sign_up(
        body.email, body.password, redirect_to=body.redirect_to or _public_url("/")
    )
    return SignUpResponse(
        user_id=identity.user_id, email=identity.email, notifications=session.notifier.drain()
    )


@router.post("/logout", response_model=AuthActionResponse)
async def logout(
    token: str | None = Depends(bearer_token),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    try:
        mode = resolve_auth_mode(token)
    except AuthFailure:
        mode = Unauthenticated(reason="invalid_token")

    session = DashboardSession(auth_service, default_policy(), mode=mode, access_token=token)
    await session.logout()
    return AuthActionResponse(redirect_to=LOGIN_PATH, notifications=session.notifier.drain())


@router.post("/password-reset", response_model=AuthActionResponse)
async def request_password_reset(
    body: PasswordResetRequest, auth_service: SupabaseAuthService = Depends(get_supabase_auth)
):
    session = DashboardSession(auth_service, default_policy())
    await session.request_password_reset(
        body.email, redirect_to=body.redirect_to or _public_url("/reset-password")
    )
    return AuthActionResponse(notifications=session.notifier.drain())


@router.post("/password", response_model=AuthActionResponse)
async def update_password(
    body: PasswordUpdateRequest,
    token: str | None = Depends(bearer_token),
    auth_service: SupabaseAuthService = Depends(get_supabase_auth),
):
    session = DashboardSession(auth_service, default_policy(), access_token=token)
    await session.update_password(body.password, body.confirm_password)
    return AuthActionResponse(redirect_to=LOGIN_PATH, notifications=session.notifier.drain())
