"""
Middleware: auth gate, secure headers, request timing.
Order matters: timing wraps innermost; then security headers; the auth gate runs outermost.
"""

import re
import time
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import get_settings
from core.security import bearer_token, verify_token
from utils.logging import get_logger

logger = get_logger(__name__)

# Static files (any path ending in an extension) and framework internals
_IGNORED_PATH = re.compile(r"^(?:.+\.[\w]+|/_next(?:/.*)?)$")
_PREFIX_SUFFIX = "(.*)"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Records request duration and logs slow requests.
    Async-compatible: uses monotonic time, no blocking.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        if duration_ms > 500:
            logger.warning(
                "slow_request",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": round(duration_ms, 2),
                    "status": response.status_code,
                },
            )
        return response


class SecureHeadersMiddleware(BaseHTTPMiddleware):
    """Adds security headers. A fronting proxy may override them."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        return response


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Bearer-token gate. Public routes and ignored paths pass through; every
    other request needs a valid JWT, whose payload lands on request.state.user.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        request.state.user = None
        if is_ignored_path(path) or is_public_path(path, get_settings().public_routes_list):
            return await call_next(request)

        token = bearer_token(request.headers.get("Authorization"))
        if token is None:
            return _unauthorized("Not authenticated")
        payload = verify_token(token)
        if payload is None:
            logger.warning("auth_rejected", extra={"path": path, "method": request.method})
            return _unauthorized("Invalid or expired token")
        request.state.user = payload
        return await call_next(request)


def is_ignored_path(path: str) -> bool:
    return bool(_IGNORED_PATH.match(path))


def is_public_path(path: str, public_routes: list[str]) -> bool:
    """Exact match, or prefix match for entries ending in `(.*)`."""
    for route in public_routes:
        if route.endswith(_PREFIX_SUFFIX):
            if path.startswith(route[: -len(_PREFIX_SUFFIX)]):
                return True
        elif path == route:
            return True
    return False


def _unauthorized(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": detail},
        headers={"WWW-Authenticate": "Bearer"},
    )
