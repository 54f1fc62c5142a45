# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# Cross-cutting request handling, registered in create_application():
# - RequestLoggingMiddleware: one "METHOD path status - Nms" line per request
# - RateLimitMiddleware: fixed-window request cap per client address
# - SecurityHeadersMiddleware: no-store caching and basic hardening headers
#
# CORS and gzip use the stock Starlette middleware (see app/main.py).
# =============================================================================

import logging
import time
from collections.abc import Callable
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("app.requests")

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "Cache-Control": "no-store",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status code and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Set by the authorization dependency on authenticated routes
        identity = getattr(request.state, "identity", None)
        who = f" user={identity.id}" if identity is not None else ""

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.0f}ms{who}"
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window rate limiter keyed by client address.

    Each client may send `max_requests` requests per `window_seconds`.
    The counters live in this middleware instance, so they are per process
    and reset on restart. `max_requests <= 0` disables the limiter.

    Example:
        app.add_middleware(RateLimitMiddleware, max_requests=100, window_seconds=60)
    """

    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
        exempt_paths: Optional[set[str]] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.exempt_paths = exempt_paths or set()
        # client -> (window start, requests seen in the window)
        self._windows: dict[str, tuple[float, int]] = {}

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.enabled or request.url.path in self.exempt_paths:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        now = self.clock()
        remaining, reset_in = self._hit(client, now)

        if remaining < 0:
            logger.warning(f"Rate limit exceeded for {client} on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"success": False, "message": RATE_LIMIT_MESSAGE},
                headers={
                    "Retry-After": str(max(int(reset_in), 1)),
                    "X-RateLimit-Limit": str(self.max_requests),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response

    def _hit(self, client: str, now: float) -> tuple[int, float]:
        """Count one request; returns (remaining requests, seconds until reset)."""
        started, count = self._windows.get(client, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[client] = (started, count)
        self._prune(now)
        return self.max_requests - count, self.window_seconds - (now - started)

    def _prune(self, now: float) -> None:
        # Drop expired windows once the table grows, so idle clients do not pile up
        if len(self._windows) < 10_000:
            return
        expired = [c for c, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for client in expired:
            del self._windows[client]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add no-store caching and hardening headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
