"""
Security headers middleware for the scraper API.
"""

from __future__ import annotations

from typing import Callable, Optional
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds conservative security headers to every response.

    The API only serves JSON, so the CSP forbids everything by default.
    """

    def __init__(self, app, enable_hsts: bool = True, hsts_max_age: int = 15552000, csp: Optional[str] = None):
        super().__init__(app)
        self.enable_hsts = enable_hsts
        self.hsts_max_age = hsts_max_age
        self.csp = csp or "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["Content-Security-Policy"] = self.csp
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}; includeSubDomains"

        for header in ("X-Powered-By", "Server"):
            if header in response.headers:
                del response.headers[header]

        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id into the structlog context for the duration of a request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path, method=request.method)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
