"""Translation of errors into HTTP responses.

Every error body has the shape ``{"error": "<message>"}``. Messages of 500
responses are replaced with a generic one and the original is logged. A 501
keeps its message.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tokiwa.adapter.error import ProviderError
from tokiwa.domain.error import (
    AuthError,
    ConflictError,
    DomainError,
    NotFoundError,
    NotSupportedError,
    RateLimitedError,
    RejectedError,
    SessionSigningError,
    StoreError,
    ValidationError,
)

# First match wins, so subclasses precede their bases
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (RejectedError, status.HTTP_400_BAD_REQUEST),
    (NotSupportedError, status.HTTP_501_NOT_IMPLEMENTED),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ProviderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (SessionSigningError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]

INTERNAL_ERROR_MESSAGE = "internal server error"


def status_for(error: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


def first_invalid_field(exc: RequestValidationError) -> str:
    """Describe the first failing field of a request schema error."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "request body is not valid JSON"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path")]
    field = ".".join(loc) or "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return error_response(status_code, INTERNAL_ERROR_MESSAGE)

    logfire.info(
        "Request rejected",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
    )
    return error_response(status_code, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = first_invalid_field(exc)
    logfire.info("Request validation failed", path=request.url.path, error=message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translation on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
