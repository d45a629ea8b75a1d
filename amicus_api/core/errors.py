"""
Error responses.

Every failure leaves the API as ``{"success": false, "message": ..., "details": ...}``
with ``details`` omitted when there is nothing to add.
"""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from amicus_api.schemas.subscriptions import ErrorResponse

INVALID_BODY_MESSAGE = "Invalid request body."
UNEXPECTED_ERROR_MESSAGE = "An unexpected server error occurred."

log = structlog.get_logger()


class ServiceError(HTTPException):
    """HTTPException that also carries a diagnostic ``details`` string."""

    def __init__(
        self, status_code: int, message: str, details: Optional[str] = None
    ) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.details = details


def error_response(
    status_code: int, message: str, details: Optional[str] = None
) -> JSONResponse:
    body = ErrorResponse(message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    details = getattr(exc, "details", None)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    response = error_response(exc.status_code, message, details)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed JSON or wrongly typed fields never reach the subscription checks.
    errors = exc.errors()
    details = None
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        details = f"{loc}: {first.get('msg')}" if loc else first.get("msg")
    return error_response(400, INVALID_BODY_MESSAGE, details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(
        "request.unhandled_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
    )
    return error_response(500, UNEXPECTED_ERROR_MESSAGE)
