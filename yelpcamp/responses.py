"""
YelpCamp API Response Utilities
Error taxonomy, response envelopes and exception handlers
"""
import math
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import api_logger
from .validation import first_error_message


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(message: str) -> Dict[str, Any]:
    """Success envelope for operations without a resource body."""
    return {"success": True, "message": message}


def deleted(resource: str = "Resource") -> Dict[str, Any]:
    """200 Deleted response"""
    return success(f"{resource} deleted")


def pagination(page: int, limit: int, total: int, returned: int) -> Dict[str, Any]:
    """Pagination metadata for one window of an ordered result set."""
    offset = (page - 1) * limit
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
        "hasMore": offset + returned < total,
    }


def error_body(error: str, message: str) -> Dict[str, str]:
    return {"error": error, "message": message}


# ============================================================
# ERROR RESPONSES
# ============================================================

class ApiException(HTTPException):
    """API error carrying its category string and status code"""

    status_code = 500
    error = "Internal Server Error"
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=message or self.default_message,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail


class BadRequest(ApiException):
    status_code = 400
    error = "Bad Request"
    default_message = "Bad request"


class ValidationError(ApiException):
    status_code = 400
    error = "Validation Error"
    default_message = "Validation failed"


class Unauthorized(ApiException):
    status_code = 401
    error = "Unauthorized"
    default_message = "You must be logged in"


class Forbidden(ApiException):
    status_code = 403
    error = "Forbidden"
    default_message = "You don't have permission to do that"


class NotFound(ApiException):
    status_code = 404
    error = "Not Found"
    default_message = "The requested endpoint does not exist"


class Conflict(ApiException):
    status_code = 409
    error = "Conflict"
    default_message = "Resource conflict"


class InternalServerError(ApiException):
    pass


def not_found(resource: str = "Resource"):
    raise NotFound(f"{resource} not found")


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Render anticipated API errors as the error envelope."""
    api_logger.warning(
        f"API Error: {exc.detail}",
        status_code=exc.status_code,
        error=exc.error,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error, exc.detail),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, bad method) in the same envelope."""
    if exc.status_code == 404:
        error, message = NotFound.error, NotFound.default_message
    elif exc.status_code == 405:
        error, message = "Method Not Allowed", str(exc.detail)
    elif exc.status_code == 401:
        error, message = Unauthorized.error, str(exc.detail)
    else:
        error, message = f"HTTP {exc.status_code}", str(exc.detail)

    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(error, message),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report only the first failing rule of a request body."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = tuple(first.get("loc", ()))

    if first.get("type") == "json_invalid" or loc == ("body",):
        api_error: ApiException = BadRequest("Invalid JSON body")
    else:
        api_error = ValidationError(first_error_message(errors))
    return await api_exception_handler(request, api_error)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    api_logger.warning(
        "Rate limit exceeded",
        limit=str(exc.detail),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=429,
        content=error_body("Too Many Requests", f"Rate limit exceeded: {exc.detail}"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for store failures and programming errors."""
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    settings = request.app.state.settings
    message = InternalServerError.default_message if settings.is_production else str(exc)
    return JSONResponse(
        status_code=500,
        content=error_body(InternalServerError.error, message or InternalServerError.default_message),
    )
