"""
Custom exceptions and the FastAPI handlers that turn them into responses
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
UNIQUE_VIOLATION = "23505"


class BaseAppException(Exception):
    """Base application exception"""
    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when validation fails"""
    def __init__(self, message: str, field: str = "email", details: str = None):
        super().__init__(message, details)
        self.field = field


class DuplicateEmailError(BaseAppException):
    """Raised when a subscriber with the same email already exists"""
    code = UNIQUE_VIOLATION


class DatabaseError(BaseAppException):
    """Raised when database operations fail"""
    pass


def _field_from_location(loc) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "body"


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first validation problem as {message, field} with a 400."""
    errors = exc.errors()
    first = errors[0] if errors else {"msg": "Invalid request", "loc": ("body",)}
    if first.get("type") in ("json_invalid", "model_type", "model_attributes_type", "dict_type"):
        field = "body"
    else:
        field = _field_from_location(first.get("loc", ()))
    logger.info(f"Rejected {request.url.path}: {field}: {first['msg']}")
    return JSONResponse(status_code=400, content={"message": first["msg"], "field": field})


async def database_exception_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(f"Waitlist error on {request.url.path}: {exc.message} ({exc.details})")
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})
