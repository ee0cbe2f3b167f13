from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from ..domain.exceptions import (
    AttemptsExhaustedError,
    ConflictError,
    DomainError,
    NotFoundError,
    OneTimeCodeError,
    StoreUnavailableError,
    UnauthorizedError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses come before their parents
STATUS_BY_ERROR = (
    (AttemptsExhaustedError, 429),
    (OneTimeCodeError, 400),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (UnauthorizedError, 401),
    (UpstreamUnavailableError, 503),
    (StoreUnavailableError, 503),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def domain_exception_handler(request: Request, exc: DomainError):
    """Translate domain errors into the shared error envelope"""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code}: {exc.message} - {request.url}")
    else:
        logger.info(f"HTTP {status_code} {exc.code}: {exc.message} - {request.url.path}")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "code": exc.code, "message": exc.message},
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with structured error response"""
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "code": "http_error", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed error information"""
    logger.warning(f"Validation error: {exc.errors()} - {request.url}")

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "code": "validation_error",
            "message": "Validation error",
            "errors": jsonable_errors(exc),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - {request.url}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"success": False, "code": "internal", "message": "Internal server error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
