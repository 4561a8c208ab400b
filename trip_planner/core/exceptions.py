"""
Custom exceptions for the trip planner API.
Every handler raises one of these with its HTTP status attached.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Request errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Access errors
    UNAUTHORIZED = "UNAUTHORIZED"
    ORIGIN_NOT_ALLOWED = "ORIGIN_NOT_ALLOWED"

    # Storage errors
    CONSTRAINT_CONFLICT = "CONSTRAINT_CONFLICT"
    CONSTRAINT_REFERENCE = "CONSTRAINT_REFERENCE"

    # Flight lookup provider errors
    PROVIDER_FAILED = "PROVIDER_FAILED"
    PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class TripPlannerException(Exception):
    """Base exception for the trip planner API."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class FieldValidationError(TripPlannerException):
    """Raised when a request field is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"field": field} if field else None,
            status_code=400
        )


class NotFoundError(TripPlannerException):
    """Raised when a trip, resource item or meta key does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            status_code=404
        )


class MethodNotAllowedError(TripPlannerException):
    """Raised when a known path is called with an unsupported method."""

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(
            message=message,
            error_code=ErrorCode.METHOD_NOT_ALLOWED,
            status_code=405
        )


class AuthenticationError(TripPlannerException):
    """Raised when the shared secret is missing or wrong."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            error_code=ErrorCode.UNAUTHORIZED,
            status_code=401
        )


class OriginNotAllowedError(TripPlannerException):
    """Raised when the request Origin is not on the allow-list."""

    def __init__(self, origin: str):
        super().__init__(
            message="Origin not allowed",
            error_code=ErrorCode.ORIGIN_NOT_ALLOWED,
            details={"origin": origin},
            status_code=403
        )


class ConflictError(TripPlannerException):
    """Raised when a write violates a uniqueness constraint."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONSTRAINT_CONFLICT,
            status_code=409
        )


class ReferenceConstraintError(TripPlannerException):
    """Raised when a write violates referential integrity."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONSTRAINT_REFERENCE,
            status_code=400
        )


class UpstreamProviderError(TripPlannerException):
    """Raised when the flight data provider call fails."""

    def __init__(self, message: str = "Flight lookup provider failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.PROVIDER_FAILED,
            details=details,
            status_code=502
        )


class ProviderNotConfiguredError(TripPlannerException):
    """Raised when no flight data provider credential is configured."""

    def __init__(self, message: str = "Flight lookup is not configured"):
        super().__init__(
            message=message,
            error_code=ErrorCode.PROVIDER_NOT_CONFIGURED,
            status_code=501
        )
