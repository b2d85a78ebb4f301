"""
Middleware components for request processing.

- Request context (request ID, IP address, user agent)
- CORS for the browser dashboard
"""

from networknote.middleware.cors import CORSMiddleware
from networknote.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "CORSMiddleware",
]
