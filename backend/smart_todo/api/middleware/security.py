from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from smart_todo.config import settings
from smart_todo.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class SecurityMiddleware(BaseHTTPMiddleware):
    """Security middleware to add essential security headers."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self._tag_extraction_path = f"{settings.api_prefix}/tag-extraction"

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Allow connections to our API host and Supabase
        csp_policy = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "connect-src 'self' https://*.supabase.co; "
            "frame-ancestors 'none';"
        )
        response.headers["Content-Security-Policy"] = csp_policy

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"

        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"

        # Log callers of the billed tag-extraction endpoint
        if request.url.path.startswith(self._tag_extraction_path):
            client_ip = request.client.host if request.client else "unknown"
            logger.info(
                "Tag extraction requested",
                extra={
                    "path": request.url.path,
                    "ip": client_ip,
                    "status": response.status_code,
                }
            )

        return response
