from typing import Optional
import hmac

from starlette.requests import Request

from trip_planner.config.settings import SecuritySettings

BEARER_PREFIX = "bearer "


def read_request_secret(request: Request, security: SecuritySettings) -> Optional[str]:
    """Shared secret from the password header, or from ``Authorization: Bearer``."""
    secret = request.headers.get(security.password_header)
    if secret:
        return secret
    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


def verify_password(candidate: Optional[str], expected: Optional[str]) -> bool:
    """Constant-time comparison; an unset secret never matches."""
    if not candidate or not expected:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
