"""
Error handlers for the FastAPI application.
Every failure leaves the service as {"ok": false, "error": "<message>"}.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError
import logging
from typing import Optional

from trip_planner.core.exceptions import (
    TripPlannerException,
    ErrorCode,
    ConflictError,
    ReferenceConstraintError,
    NotFoundError,
    MethodNotAllowedError,
)
from trip_planner.schemas.base import ErrorEnvelope

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "unique"
FOREIGN_KEY_VIOLATION = "foreign_key"

_SQLSTATE_KINDS = {
    "23505": UNIQUE_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
}

_SQLITE_ERROR_KINDS = {
    "SQLITE_CONSTRAINT_UNIQUE": UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_PRIMARYKEY": UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_FOREIGNKEY": FOREIGN_KEY_VIOLATION,
}

# Only consulted when the driver exposes no structured code
_MESSAGE_KINDS = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("duplicate key value violates unique constraint", UNIQUE_VIOLATION),
    ("violates foreign key constraint", FOREIGN_KEY_VIOLATION),
)


def classify_integrity_error(exc: IntegrityError) -> Optional[str]:
    """
    Work out which constraint an ``IntegrityError`` violated.

    Returns:
        ``"unique"``, ``"foreign_key"`` or ``None`` for any other constraint
    """
    orig = getattr(exc, "orig", None)

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return _SQLSTATE_KINDS.get(str(sqlstate))

    error_name = getattr(orig, "sqlite_errorname", None)
    if error_name:
        return _SQLITE_ERROR_KINDS.get(error_name)

    message = str(orig if orig is not None else exc)
    for fragment, kind in _MESSAGE_KINDS:
        if fragment in message:
            return kind
    return None


def map_integrity_error(exc: IntegrityError) -> Optional[TripPlannerException]:
    """Unique violations become 409, foreign key violations 400, anything else None."""
    kind = classify_integrity_error(exc)
    message = str(getattr(exc, "orig", None) or exc)
    if kind == UNIQUE_VIOLATION:
        return ConflictError(message)
    if kind == FOREIGN_KEY_VIOLATION:
        return ReferenceConstraintError(message)
    return None


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message).model_dump(),
    )


class ErrorHandler:
    """
    Maps every exception type the service can raise onto an error envelope.
    """

    async def handle_trip_planner_exception(
        self,
        request: Request,
        exc: TripPlannerException
    ) -> JSONResponse:
        """
        Handle application exceptions, which carry their own status.

        Args:
            request: FastAPI request object
            exc: TripPlannerException instance

        Returns:
            JSONResponse with the error envelope
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"{type(exc).__name__} in request {request_id}: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'details': exc.details,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        return error_response(exc.status_code, exc.message)

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle FastAPI request validation errors (malformed query or path values).
        """
        request_id = getattr(request.state, 'request_id', 'unknown')
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = str(first.get('loc', ['request'])[-1])
        message = f"{field} is invalid"

        logger.warning(
            f"Validation error in request {request_id}: {len(errors)} field errors",
            extra={
                'request_id': request_id,
                'error_code': ErrorCode.VALIDATION_ERROR.value,
                'request_path': request.url.path
            }
        )

        return error_response(400, message)

    async def handle_http_exception(
        self,
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        """
        Handle router-level HTTP errors (unknown path, wrong method).
        """
        if exc.status_code == 404:
            return await self.handle_trip_planner_exception(request, NotFoundError())
        if exc.status_code == 405:
            return await self.handle_trip_planner_exception(request, MethodNotAllowedError())

        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.warning(
            f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
            extra={
                'request_id': request_id,
                'status_code': exc.status_code,
                'request_path': request.url.path
            }
        )

        return error_response(exc.status_code, str(exc.detail))

    async def handle_integrity_error(
        self,
        request: Request,
        exc: IntegrityError
    ) -> JSONResponse:
        """
        Handle database constraint violations that escape a service.
        """
        mapped = map_integrity_error(exc)
        if mapped is None:
            return await self.handle_generic_exception(request, exc)
        return await self.handle_trip_planner_exception(request, mapped)

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """
        Handle unexpected exceptions with full error logging.

        Args:
            request: FastAPI request object
            exc: Exception instance

        Returns:
            JSONResponse with a generic 500 envelope
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {str(exc)}",
            exc_info=exc,
            extra={
                'request_id': request_id,
                'exception_type': type(exc).__name__,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        return error_response(500, "Internal server error")


# Global error handler instance
error_handler = ErrorHandler()


def setup_error_handlers(app):
    """
    Set up all error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(TripPlannerException)
    async def trip_planner_exception_handler(request: Request, exc: TripPlannerException):
        return await error_handler.handle_trip_planner_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        return await error_handler.handle_integrity_error(request, exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)
