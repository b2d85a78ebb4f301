"""
overrides.py
------------
Purpose:
    Demo-mode admin/manager logins that bypass Supabase Auth.

Notes:
    - Credentials are the configured hard-coded pairs.
    - A successful override login is represented by a locally signed HS256
      token, so the override travels with the request instead of living in a
      process-wide flag.
"""

import hmac
import time

import jwt

from networknote.config import settings
from networknote.errors import AuthFailure
from networknote.models.domain.session_domain import AdminOverride, AuthMode, ManagerOverride

OVERRIDE_ISSUER = "networknote-override"
OVERRIDE_ALGORITHM = "HS256"


def _matches(expected_email: str, expected_password: str, email: str, password: str) -> bool:
    return hmac.compare_digest(email.encode(), expected_email.encode()) and hmac.compare_digest(
        password.encode(), expected_password.encode()
    )


def match_override(email: str, password: str) -> AuthMode | None:
    """Admin credentials are checked before manager credentials."""
    if _matches(settings.ADMIN_OVERRIDE_EMAIL, settings.ADMIN_OVERRIDE_PASSWORD, email, password):
        return AdminOverride(email=email)
    if _matches(
        settings.MANAGER_OVERRIDE_EMAIL, settings.MANAGER_OVERRIDE_PASSWORD, email, password
    ):
        return ManagerOverride(email=email)
    return None


def issue_override_token(mode: AdminOverride | ManagerOverride) -> str:
    now = int(time.time())
    claims = {
        "iss": OVERRIDE_ISSUER,
        "sub": mode.email,
        "email": mode.email,
        "override": "admin" if isinstance(mode, AdminOverride) else "manager",
        "iat": now,
        "exp": now + settings.OVERRIDE_TOKEN_TTL_SECONDS,
    }
    return jwt.encode(claims, settings.OVERRIDE_TOKEN_SECRET, algorithm=OVERRIDE_ALGORITHM)


def is_override_token(token: str) -> bool:
    try:
        header = jwt.get_unverified_header(token)
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return False
    return header.get("alg") == OVERRIDE_ALGORITHM and claims.get("iss") == OVERRIDE_ISSUER


def decode_override_token(token: str) -> AdminOverride | ManagerOverride:
    try:
        claims = jwt.decode(
            token,
            settings.OVERRIDE_TOKEN_SECRET,
            algorithms=[OVERRIDE_ALGORITHM],
            issuer=OVERRIDE_ISSUER,
            options={"verify_exp": True},
        )
    except jwt.PyJWTError as e:
        raise AuthFailure(f"Invalid override token: {e}") from e

    if claims.get("override") == "admin":
        return AdminOverride(email=claims.get("email", ""))
    if claims.get("override") == "manager":
        return ManagerOverride(email=claims.get("email", ""))
    raise AuthFailure("Invalid override token: unknown override kind")
