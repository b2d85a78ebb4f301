"""
Supabase Auth (GoTrue) client.
Wraps the REST endpoints the dashboard depends on: session lookup, sign-in,
sign-up, sign-out, password recovery, password update and admin user creation.
"""

import asyncio
from typing import Any

import httpx

from networknote.config import settings
from networknote.errors import AuthFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.session_domain import Identity

logger = get_logger(__name__)

REQUEST_TIMEOUT = 10  # seconds
MAX_RETRIES = 3
BACKOFF_FACTOR = 2
RETRY_STATUS_CODES = {429, 500, 502, 503, 504}


class AuthTokens:
    """Structured representation of a GoTrue token response."""

    def __init__(self, data: dict):
        self.access_token = data.get("access_token")
        self.refresh_token = data.get("refresh_token")
        self.token_type = data.get("token_type", "bearer")
        self.expires_in = data.get("expires_in")
        self.identity = Identity.from_claims(data.get("user") or {})

    def is_valid(self) -> bool:
        return bool(self.access_token)


class SupabaseAuthService:
    """Async client for the auth collaborator."""

    def __init__(
        self,
        base_url: str | None = None,
        anon_key: str | None = None,
        service_role_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.auth_url()).rstrip("/")
        self.anon_key = anon_key if anon_key is not None else settings.SUPABASE_ANON_KEY
        self.service_role_key = (
            service_role_key if service_role_key is not None else settings.SUPABASE_SERVICE_ROLE_KEY
        )
        self._transport = transport

    def _headers(self, bearer: str | None = None, admin: bool = False) -> dict[str, str]:
        api_key = (self.service_role_key if admin else self.anon_key) or ""
        headers = {"apikey": api_key, "Content-Type": "application/json"}
        token = bearer or (self.service_role_key if admin else None)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
        bearer: str | None = None,
        admin: bool = False,
    ) -> httpx.Response:
        """Perform a request with retry/backoff on transient statuses."""
        url = f"{self.base_url}{path}"
        last_error: Exception | None = None

        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self._transport) as client:
            for attempt in range(1, MAX_RETRIES + 1):
                try:
                    response = await client.request(
                        method,
                        url,
                        json=json,
                        params=params,
                        headers=self._headers(bearer=bearer, admin=admin),
                    )

                    if response.status_code in RETRY_STATUS_CODES and attempt < MAX_RETRIES:
                        wait_time = BACKOFF_FACTOR**attempt
                        logger.warning(
                            "Supabase Auth transient status",
                            operation=operation,
                            status_code=response.status_code,
                            attempt=attempt,
                            wait_time=wait_time,
                        )
                        await asyncio.sleep(wait_time)
                        continue

                    return response

                except httpx.RequestError as exc:
                    last_error = exc
                    logger.warning(
                        "Supabase Auth request error",
                        operation=operation,
                        attempt=attempt,
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    if attempt < MAX_RETRIES:
                        await asyncio.sleep(BACKOFF_FACTOR**attempt)

        raise AuthFailure(f"{operation} failed: {last_error}") from last_error

    def _raise_for_status(self, response: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        if response.is_success:
            return data if isinstance(data, dict) else {}

        message = (
            data.get("error_description")
            or data.get("msg")
            or data.get("message")
            or f"{operation} failed with status {response.status_code}"
        )
        logger.warning(
            "Supabase Auth request rejected",
            operation=operation,
            status_code=response.status_code,
            error=message,
        )
        raise AuthFailure(message, status_code=response.status_code)

    async def get_session(self, access_token: str | None) -> Identity | None:
        """Return the identity behind an access token, or None without one."""
        if not access_token:
            return None
        response = await self._request("GET", "/user", "get_session", bearer=access_token)
        if response.status_code in (401, 403):
            return None
        return Identity.from_claims(self._raise_for_status(response, "get_session"))

    async def sign_in(self, email: str, password: str) -> AuthTokens:
        response = await self._request(
            "POST",
            "/token",
            "sign_in",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        tokens = AuthTokens(self._raise_for_status(response, "sign_in"))
        if not tokens.is_valid():
            raise AuthFailure("Sign-in response did not include an access token")

        logger.info("User signed in", user_id=tokens.identity.user_id)
        return tokens

    async def sign_up(self, email: str, password: str, redirect_to: str | None = None) -> Identity:
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._request(
            "POST",
            "/signup",
            "sign_up",
            params=params,
            json={"email": email, "password": password},
        )
        data = self._raise_for_status(response, "sign_up")
        identity = Identity.from_claims(data.get("user") or data)
        logger.info("User signed up", user_id=identity.user_id)
        return identity

    async def sign_out(self, access_token: str) -> None:
        response = await self._request("POST", "/logout", "sign_out", bearer=access_token)
        self._raise_for_status(response, "sign_out")

    async def reset_password_for_email(self, email: str, redirect_to: str | None = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._request(
            "POST", "/recover", "reset_password", params=params, json={"email": email}
        )
        self._raise_for_status(response, "reset_password")
        logger.info("Password reset email requested")

    async def update_user(self, access_token: str, password: str) -> Identity:
        response = await self._request(
            "PUT", "/user", "update_user", bearer=access_token, json={"password": password}
        )
        return Identity.from_claims(self._raise_for_status(response, "update_user"))

    async def admin_create_user(self, email: str, user_metadata: dict[str, Any]) -> Identity:
        if not self.service_role_key:
            raise AuthFailure("SUPABASE_SERVICE_ROLE_KEY not configured", status_code=500)

        response = await self._request(
            "POST",
            "/admin/users",
            "admin_create_user",
            admin=True,
            json={"email": email, "email_confirm": True, "user_metadata": user_metadata},
        )
        identity = Identity.from_claims(self._raise_for_status(response, "admin_create_user"))
        logger.info("Auth user created by admin", user_id=identity.user_id)
        return identity


supabase_auth = SupabaseAuthService()


def get_supabase_auth() -> SupabaseAuthService:
    return supabase_auth
