"""
verify.py
---------
Purpose:
    Resolve the bearer token on a request into an AuthMode.

Notes:
    - Supabase access tokens are verified against the project JWKS (ES256).
    - Override tokens (demo admin/manager logins) are verified locally.
    - `auth_mode_dependency` never returns an indeterminate state: no token
      resolves to Unauthenticated, a bad token raises AuthFailure.
    - `require_roles` gates routes by resolved role.
    - `function_caller` gates the generate-* functions on the project key or
      a signed-in session.
"""

import hmac
from dataclasses import dataclass

import jwt
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient

from networknote.auth.overrides import decode_override_token, is_override_token
from networknote.config import settings
from networknote.errors import AuthFailure, PermissionDenied
from networknote.models.domain.session_domain import (
    AuthMode,
    Identity,
    RealSession,
    Role,
    Unauthenticated,
)
from networknote.services.role_resolver import actor_name, default_policy, resolve_role

SUPABASE_AUDIENCE = "authenticated"

_jwk_client = PyJWKClient(settings.jwks_url())
_security = HTTPBearer(auto_error=False)


def verify_jwt(token: str) -> dict:
    try:
        signing_key = _jwk_client.get_signing_key_from_jwt(token)
        decoded = jwt.decode(
            token,
            signing_key.key,
            algorithms=["ES256"],
            audience=SUPABASE_AUDIENCE,
            options={"verify_exp": True},
        )
        return decoded
    except Exception as e:
        raise AuthFailure(f"Invalid authentication token: {e}") from e


def resolve_auth_mode(token: str | None) -> AuthMode:
    if not token:
        return Unauthenticated()
    if is_override_token(token):
        return decode_override_token(token)
    return RealSession(identity=Identity.from_claims(verify_jwt(token)))


def auth_mode_dependency(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> AuthMode:
    return resolve_auth_mode(credentials.credentials if credentials else None)


@dataclass(frozen=True)
class SessionContext:
    mode: AuthMode
    role: Role
    actor_name: str
    access_token: str | None = None


def require_roles(*roles: Role):
    """Dependency factory: 401 without a session, 403 for any other role."""

    def _dependency(
        credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    ) -> SessionContext:
        token = credentials.credentials if credentials else None
        mode = resolve_auth_mode(token)
        policy = default_policy()
        role = resolve_role(mode, policy)
        if role is None:
            raise AuthFailure("Not signed in")
        if roles and role not in roles:
            raise PermissionDenied(f"This action requires one of: {', '.join(r.value for r in roles)}")
        return SessionContext(
            mode=mode, role=role, actor_name=actor_name(mode, policy), access_token=token
        )

    return _dependency


def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str | None:
    return credentials.credentials if credentials else None


signed_in = require_roles()
admin_or_manager = require_roles(Role.ADMIN, Role.MANAGER)
admin_only = require_roles(Role.ADMIN)


def _is_project_key(candidate: str | None) -> bool:
    expected = settings.SUPABASE_ANON_KEY
    if not candidate or not expected:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())


def function_caller(
    apikey: str | None = Header(default=None),
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> AuthMode | None:
    """
    Gate for the generate-* functions: the project key (`apikey` header or
    bearer) or any signed-in session. Returns the session's AuthMode, or
    None for a project-key caller.
    """
    token = credentials.credentials if credentials else None
    if _is_project_key(apikey) or _is_project_key(token):
        return None

    mode = resolve_auth_mode(token)
    if resolve_role(mode, default_policy()) is None:
        raise AuthFailure("Missing or invalid API key")
    return mode
