"""
Unified error handling for consistent API error responses.

All API errors should use these classes to ensure consistent response format:
{
    "error": "Human-readable message"
}

Store-specific detail (driver messages, SQL state codes, stack traces)
is logged but never returned to the client.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """
    Base API error class for consistent error responses.

    All API errors use this format:
    {
        "error": "Human-readable message"
    }
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message
        super().__init__(status_code=status_code, detail=message, headers=headers)


class ValidationError(APIError):
    """Missing or malformed request parameter (400)."""

    def __init__(self, message: str):
        super().__init__(status_code=400, code="VALIDATION_ERROR", message=message)


class NotFoundError(APIError):
    """Query matched no rows where at least one was expected (404)."""

    def __init__(self, resource: str):
        super().__init__(status_code=404, code="NOT_FOUND", message=f"{resource} not found")


class UpstreamError(APIError):
    """Record Store read failed (500)."""

    def __init__(self, message: str = "Failed to fetch data from the Record Store"):
        super().__init__(status_code=500, code="UPSTREAM_ERROR", message=message)


class UpstreamTimeoutError(APIError):
    """Record Store read timed out (504)."""

    def __init__(self, message: str = "The Record Store did not respond in time"):
        super().__init__(status_code=504, code="UPSTREAM_TIMEOUT", message=message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    FastAPI exception handler for APIError.

    Converts APIError exceptions to consistent JSON responses.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.code,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed query parameters as a 400 ValidationError."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())[1:])
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    message = "Invalid request parameters: " + "; ".join(problems)
    return await api_error_handler(request, ValidationError(message))
