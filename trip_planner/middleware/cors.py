"""
Origin allow-list and CORS headers.

Runs before authentication: a disallowed Origin is refused with 403 and an
OPTIONS preflight is answered with 204 without reaching the routes. Unhandled
errors from inner layers are turned into the 500 envelope here.
"""

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging
from typing import Dict, List, Optional

from trip_planner.config.settings import SecuritySettings
from trip_planner.core.error_handlers import error_handler, error_response
from trip_planner.core.exceptions import OriginNotAllowedError

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = "Content-Type, Authorization, X-App-Password"
ALLOWED_METHODS = "GET, POST, PATCH, PUT, DELETE, OPTIONS"


def is_origin_allowed(origin: str, allowed_origins: List[str]) -> bool:
    """An empty allow-list or a ``*`` entry admits every origin."""
    if not allowed_origins:
        return True
    return origin in allowed_origins or "*" in allowed_origins


def build_cors_headers(origin: Optional[str], allowed_origins: List[str]) -> Dict[str, str]:
    if origin and is_origin_allowed(origin, allowed_origins):
        allow_origin = origin
    elif allowed_origins and "*" not in allowed_origins:
        allow_origin = allowed_origins[0]
    else:
        allow_origin = "*"

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Vary": "Origin",
    }


class OriginPolicyMiddleware(BaseHTTPMiddleware):
    """Applies the origin allow-list and decorates every response with CORS headers."""

    def __init__(self, app, security: SecuritySettings):
        super().__init__(app)
        self.allowed_origins = security.allowed_origins

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        cors_headers = build_cors_headers(origin, self.allowed_origins)

        if origin and not is_origin_allowed(origin, self.allowed_origins):
            logger.warning(
                f"Rejected origin {origin}",
                extra={
                    'request_id': getattr(request.state, 'request_id', 'unknown'),
                    'path': request.url.path,
                }
            )
            error = OriginNotAllowedError(origin)
            response = error_response(error.status_code, error.message)
            response.headers.update(cors_headers)
            return response

        if request.method.upper() == "OPTIONS":
            return Response(status_code=204, headers=cors_headers)

        try:
            response = await call_next(request)
        except Exception as exc:
            # Unexpected failures still leave with CORS headers
            response = await error_handler.handle_generic_exception(request, exc)
        response.headers.update(cors_headers)
        return response
