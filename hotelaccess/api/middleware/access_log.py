"""Access logging middleware for FastAPI.

Logs one line per API request with:
- Session role (resolved from the bearer token, "anonymous" otherwise)
- HTTP method and path
- Response status
- Duration
- Client IP address

401/403 responses are logged at WARNING since they are access denials.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from hotelaccess.core.security import decode_token

logger = logging.getLogger(__name__)

# Paths that should not be logged (health checks, docs)
EXCLUDED_PATHS = {
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
}


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # First entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


def get_session_role(request: Request) -> str:
    """Role name for log lines, without failing on bad tokens."""
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return "anonymous"
    claims = decode_token(token)
    if claims is None:
        return "invalid-token"
    return claims.role.value if claims.role else "unknown-role"


def determine_level(status_code: int) -> int:
    """Log level based on response status."""
    if status_code >= 500:
        return logging.ERROR
    if status_code in (401, 403):
        return logging.WARNING
    return logging.INFO


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every API request with the caller's role."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start_time) * 1000)

        logger.log(
            determine_level(response.status_code),
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"role={get_session_role(request)} ip={get_client_ip(request)} "
            f"duration_ms={duration_ms}",
        )
        return response
