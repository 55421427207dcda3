"""
Custom exceptions and error handlers for consistent error responses.

Every error leaving the API has the same envelope: {"message": <string>}.
Error codes are kept on the exception for logging only.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("ledger")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class BadRequestError(AppException):
    """Raised when the client sent something the ledger cannot accept."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="ERR_BAD_REQUEST",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class InvalidDateFormatError(BadRequestError):
    """Raised when a date, month or year string does not match its format."""


class InvalidTransactionTypeError(BadRequestError):
    """Raised when `tipe` is neither income nor expense."""

    def __init__(self):
        super().__init__("Tipe harus 'pemasukan' atau 'pengeluaran'")


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found (or logically deleted)."""

    def __init__(self, message: str = "Data tidak ditemukan"):
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )


class StorageError(AppException):
    """Raised when the underlying store fails."""

    def __init__(self, message: str = "Gagal mengakses penyimpanan data"):
        super().__init__(
            message=message,
            error_code="ERR_STORAGE",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class StartupError(AppException):
    """Raised when the store cannot be opened at boot. Fatal."""

    def __init__(self, message: str = "Gagal membuka database"):
        super().__init__(
            message=message,
            error_code="ERR_STARTUP",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    logger.info(
        "Application error",
        extra={"error_code": exc.error_code, "path": request.url.path, "status_code": exc.status_code}
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handler for HTTP exceptions (unknown routes, wrong methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handler for request decoding errors.

    Malformed JSON, wrong field types and non-numeric path ids all surface
    as 400 with a short description of the first problem.
    """
    errors = exc.errors()
    message = "Request tidak valid"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", "")
        message = f"Request tidak valid: {location}: {detail}" if location else f"Request tidak valid: {detail}"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message}
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception: %s", type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Terjadi kesalahan pada server"}
    )
