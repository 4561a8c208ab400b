"""
Core building blocks: database access, exceptions, field validation,
error handlers, logging and request dependencies.
"""

from .exceptions import (
    TripPlannerException,
    ErrorCode,
    FieldValidationError,
    NotFoundError,
)

__all__ = [
    "TripPlannerException",
    "ErrorCode",
    "FieldValidationError",
    "NotFoundError",
]
