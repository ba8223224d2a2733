"""
Application exceptions and the JSON error envelope.

Every failure leaves the API as {"success": false, "message": "..."}.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hirehub.core.logger import app_logger


class AppException(HTTPException):
    """Base class for domain errors raised from request handlers."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundException(AppException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class BadRequestException(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class UnauthorizedException(AppException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)
        self.headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenException(AppException):
    def __init__(self, detail: str = "Not allowed"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail)


class PayloadTooLargeException(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail)


def create_error_response(message: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the failure body shared by every endpoint."""
    body: Dict[str, Any] = {"success": False, "message": message}
    if extra:
        body.update(extra)
    return body


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=create_error_response(message),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    app_logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=create_error_response("Duplicate record"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    app_logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=create_error_response(str(exc) or "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
