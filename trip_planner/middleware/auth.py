"""
Shared-secret authentication middleware.

Protected requests carry the application password in the password header
(``X-App-Password`` by default) or as ``Authorization: Bearer <secret>``.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging
from typing import Optional, Set

from trip_planner.config.settings import SecuritySettings
from trip_planner.core.security import read_request_secret, verify_password
from trip_planner.core.error_handlers import error_response
from trip_planner.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

PUBLIC_PATHS = {"/health", "/auth/verify"}
DOCS_PATHS = {"/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"}


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Rejects every non-public request whose secret does not match the
    configured application password.
    """

    def __init__(self, app, security: SecuritySettings, public_paths: Optional[Set[str]] = None):
        super().__init__(app)
        self.security = security
        self.public_paths = set(public_paths) if public_paths is not None else set(PUBLIC_PATHS)
        if not security.app_password:
            logger.warning("SECURITY_APP_PASSWORD is not set; every protected request will be rejected")

    async def dispatch(self, request: Request, call_next):
        """
        Process authentication for incoming requests.

        Args:
            request: FastAPI request object
            call_next: Next middleware in chain

        Returns:
            Response object
        """
        if request.url.path in self.public_paths:
            return await call_next(request)

        secret = read_request_secret(request, self.security)
        if not verify_password(secret, self.security.app_password):
            logger.warning(
                f"{'Invalid' if secret else 'Missing'} secret for request {getattr(request.state, 'request_id', 'unknown')}",
                extra={
                    'request_id': getattr(request.state, 'request_id', 'unknown'),
                    'path': request.url.path,
                    'client_ip': request.client.host if request.client else 'unknown'
                }
            )
            error = AuthenticationError()
            return error_response(error.status_code, error.message)

        return await call_next(request)
