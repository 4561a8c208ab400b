"""
Middleware package for FastAPI application.
"""

from .auth import AuthenticationMiddleware
from .cors import OriginPolicyMiddleware
from .request_context import RequestContextMiddleware

__all__ = ["AuthenticationMiddleware", "OriginPolicyMiddleware", "RequestContextMiddleware"]
