"""
Domain exceptions and FastAPI exception handlers with request ID support
Error envelopes: { message, code, request_id } or { error: { message }, request_id }
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Optional, Dict, Any

from .logging_config import get_request_id

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for errors raised by the storage layer"""


class ConstraintViolation(StorageError):
    """A declared uniqueness invariant was violated (username, email, queue entry...)"""

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.constraint = constraint


class StoreFailure(StorageError):
    """The relational store failed to execute an operation"""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        super().__init__(f"{operation} failed: {type(cause).__name__ if cause else 'unknown error'}")
        self.operation = operation
        self.cause = cause


class UpstreamFailure(Exception):
    """A third-party collaborator (payment provider, email) failed"""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message


class InvalidStatusTransition(ValueError):
    """A distribution status change that the state machine does not allow"""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move distribution from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class ErrorResponse:
    """Standard error response builder"""

    @staticmethod
    def create(
        message: str,
        code: str,
        request_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        nested: bool = False
    ) -> dict:
        """
        Create an error response body

        Args:
            message: Human-readable error message
            code: Error code (e.g., "VALIDATION_ERROR", "CONFLICT")
            request_id: Request ID from context (auto-fetched if None)
            details: Optional additional error details
            nested: If True, use the { error: { message } } envelope

        Returns:
            Dictionary with error details
        """
        if request_id is None:
            request_id = get_request_id()

        if nested:
            response = {"error": {"message": message, "code": code}}
            if details:
                response["error"]["details"] = details
        else:
            response = {"message": message, "code": code}
            if details:
                response["details"] = details

        if request_id:
            response["request_id"] = request_id
        return response


def error_detail(message: str) -> dict:
    """HTTPException detail that renders as { error: { message } }"""
    return {"error": {"message": message}}


_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "AUTH_ERROR",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
    502: "UPSTREAM_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with request ID"""
    request_id = get_request_id()
    error_code = _ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    detail = exc.detail

    if isinstance(detail, dict) and "error" in detail:
        inner = detail["error"]
        message = inner.get("message", "") if isinstance(inner, dict) else str(inner)
        content = ErrorResponse.create(message, error_code, request_id=request_id, nested=True)
    else:
        message = str(detail) if detail else f"HTTP {exc.status_code} error"
        content = ErrorResponse.create(message, error_code, request_id=request_id)

    logger.warning(f"HTTP {exc.status_code}: {message}", extra={"path": request.url.path})

    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation exceptions with request ID"""
    errors = exc.errors()
    detail = "; ".join(f"{err['loc']}: {err['msg']}" for err in errors)

    logger.warning(f"Validation error: {detail}", extra={"path": request.url.path})

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse.create(
            message=f"Validation error: {detail}",
            code="VALIDATION_ERROR",
            details={"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in errors]},
        ),
    )


async def constraint_violation_handler(request: Request, exc: ConstraintViolation) -> JSONResponse:
    logger.warning(f"Constraint violation on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=ErrorResponse.create(exc.message, "CONFLICT"),
    )


async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
    logger.error(f"Store failure on {request.url.path}: {exc}", exc_info=exc.cause)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse.create("Database temporarily unavailable", "SERVICE_UNAVAILABLE"),
    )


async def upstream_failure_handler(request: Request, exc: UpstreamFailure) -> JSONResponse:
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=ErrorResponse.create(exc.message, "UPSTREAM_ERROR", nested=True),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions with request ID"""
    from .config import config

    error_message = "Internal server error"
    error_details = None
    if config.is_dev:
        error_message = f"Internal server error: {str(exc)}"
        error_details = {"exception_type": type(exc).__name__}

    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True, extra={"path": request.url.path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse.create(error_message, "INTERNAL_ERROR", details=error_details),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ConstraintViolation, constraint_violation_handler)
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.add_exception_handler(UpstreamFailure, upstream_failure_handler)
    app.add_exception_handler(Exception, general_exception_handler)
