"""
Custom exception classes.

Represent errors raised while talking to the upstream content backend,
plus the app-level exception handlers.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cors import CORS_HEADERS

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base exception class for upstream calls."""

    #: Message safe to return to callers; detail stays in the logs.
    public_message = "Upstream request failed"

    def __init__(self, url: str, detail: str):
        self.url = url
        self.detail = detail
        super().__init__(f"{self.public_message}: {detail}")


class UpstreamUnreachableError(UpstreamError):
    """Failed to connect to the upstream backend (DNS, connect, timeout)."""

    public_message = "Upstream unreachable"

    def __init__(self, url: str, cause: Exception):
        self.cause = cause
        super().__init__(url, f"{type(cause).__name__}: {cause}")


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int, body_snippet: str = ""):
        self.status_code = status_code
        self.body_snippet = body_snippet
        self.public_message = f"API responded with status: {status_code}"
        super().__init__(url, body_snippet or f"HTTP {status_code}")


class UpstreamDecodeError(UpstreamError):
    """Upstream body was empty or not valid JSON."""

    public_message = "Failed to parse API response"


class InvalidRequestBodyError(Exception):
    """Inbound body could not be used (not JSON, or not a JSON object)."""

    public_message = "Invalid request body"


# ===========================================
# Exception Handlers
# ===========================================


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "data": [], "error": "Internal Server Error"},
        headers=CORS_HEADERS,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "data": [], "error": exc.detail},
        headers=CORS_HEADERS,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for validation errors.
    """
    return JSONResponse(
        status_code=422,
        content={"success": False, "data": [], "error": "Validation Error", "detail": str(exc.errors())},
        headers=CORS_HEADERS,
    )
