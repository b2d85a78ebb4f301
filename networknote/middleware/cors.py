"""
Origin allow-list for the browser dashboard.

A browser origin listed in CORS_ALLOWED_ORIGINS gets CORS headers on its
responses and a 204 on preflight; a preflight from any other origin is
refused with 403. Requests without an Origin header pass untouched.

Usage:
    app.add_middleware(CORSMiddleware, allowed_origins=settings.cors_origins())
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from networknote.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD")
ALLOWED_HEADERS = ("Accept", "Authorization", "Content-Type", "X-Request-ID", "X-Requested-With")


def _is_preflight(request: Request) -> bool:
    return request.method == "OPTIONS" and "access-control-request-method" in request.headers


class CORSMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        allowed_origins: list[str] | None = None,
        allow_credentials: bool = True,
        max_age: int = 600,
    ):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins or ())
        self.allow_credentials = allow_credentials
        self.max_age = max_age
        logger.info("CORS allow-list loaded", origins=sorted(self.allowed_origins))

    def _origin_headers(self, origin: str) -> dict[str, str]:
        headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        return headers

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        allowed = origin is not None and origin in self.allowed_origins

        if _is_preflight(request):
            if not allowed:
                logger.warning("Preflight refused", origin=origin, path=request.url.path)
                return Response(status_code=403, content="Origin not allowed")
            headers = self._origin_headers(origin)
            headers["Access-Control-Allow-Methods"] = ", ".join(ALLOWED_METHODS)
            headers["Access-Control-Allow-Headers"] = ", ".join(ALLOWED_HEADERS)
            headers["Access-Control-Max-Age"] = str(self.max_age)
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        if allowed:
            response.headers.update(self._origin_headers(origin))
        elif origin:
            logger.debug("Origin not on allow-list", origin=origin, path=request.url.path)
        return response
